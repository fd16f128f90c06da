"""
Shared fixtures for Grid Map Editor tests.

Provides fresh scenes, engines wired to an in-memory asset decoder,
and helpers for painting into QImages.
"""
import sys
import os
import pytest

# Renderer and widget tests paint without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))


# ── Fake image sources ──────────────────────────────────────────────────

def make_test_decoder(sizes=None, failing=("missing.png",)):
    """Decoder returning solid QImages for known sources

    Args:
        sizes: Mapping source -> (width, height); unknown sources are 16x16
        failing: Sources that raise OSError
    """
    sizes = dict(sizes or {})

    def decode(source):
        from PyQt5.QtGui import QImage, QColor
        if source in failing:
            raise OSError(f"cannot open {source}")
        width, height = sizes.get(source, (16, 16))
        image = QImage(width, height, QImage.Format_ARGB32)
        image.fill(QColor(0, 128, 0))
        return image

    return decode


@pytest.fixture
def scene():
    """Fresh default Scene"""
    from models.scene import Scene
    return Scene()


@pytest.fixture
def assets(qapp):
    """Asset pool with an in-memory decoder and no scheduler (call process_pending)"""
    from services.asset_pool import AssetPool
    return AssetPool(decoder=make_test_decoder({"tree.png": (64, 32)}))


@pytest.fixture
def engine(assets):
    """EditorEngine over a fresh scene with a single 'Initial state' entry"""
    from engine import EditorEngine
    return EditorEngine(assets=assets)


@pytest.fixture
def event_log(engine):
    """Records every engine event as (name, args)"""
    from engine.events import EVENT_NAMES
    log = []
    for name in EVENT_NAMES:
        engine.add_listener(name, lambda *args, _n=name: log.append((_n, args)))
    return log


@pytest.fixture
def canvas_image(qapp):
    """Factory for a transparent ARGB32 image"""
    from PyQt5.QtGui import QImage
    from PyQt5.QtCore import Qt

    def make(width=128, height=128):
        image = QImage(width, height, QImage.Format_ARGB32)
        image.fill(Qt.transparent)
        return image

    return make
