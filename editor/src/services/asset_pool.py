"""Asset pool: shared, lazily decoded image handles keyed by source identifier.

A source identifier is a file path or a ``data:`` URL. Entities in the
scene only ever store the identifier; renderers ask the pool for the
handle and fall back to a placeholder until it is READY.

Decoding goes through Pillow and numpy into a QImage, the same way the
texture loader always read images (``Image.open(...).convert('RGBA')``
then ``np.array``).
"""

import base64
import io
import logging
import urllib.parse
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional

import numpy as np
from PIL import Image
from PyQt5.QtGui import QImage


class AssetState(Enum):
    PENDING = 'pending'
    READY = 'ready'
    FAILED = 'failed'


class AssetHandle:
    """Opaque reference to one decoded image.

    State only moves PENDING -> READY or PENDING -> FAILED; failure is
    permanent for the handle.
    """

    def __init__(self, source: str):
        self.source = source
        self.state = AssetState.PENDING
        self.image: Optional[QImage] = None
        self.error: Optional[str] = None

    def is_ready(self) -> bool:
        return self.state is AssetState.READY

    def is_failed(self) -> bool:
        return self.state is AssetState.FAILED

    @property
    def natural_width(self) -> int:
        return self.image.width() if self.image is not None else 0

    @property
    def natural_height(self) -> int:
        return self.image.height() if self.image is not None else 0

    def __repr__(self):
        return f"AssetHandle({self.source[:40]!r}, {self.state.value})"


def _open_source(source: str) -> Image.Image:
    if source.startswith('data:'):
        header, sep, payload = source.partition(',')
        if not sep:
            raise ValueError("data URL without payload")
        if header.endswith(';base64'):
            raw = base64.b64decode(payload, validate=False)
        else:
            raw = urllib.parse.unquote_to_bytes(payload)
        return Image.open(io.BytesIO(raw))
    return Image.open(source)


def decode_image_source(source: str) -> QImage:
    """Decode a file path or data URL into an RGBA QImage

    Raises:
        OSError: If the file is missing or not a recognized image
        ValueError: If a data URL is malformed
    """
    img = _open_source(source).convert('RGBA')
    img_data = np.ascontiguousarray(np.array(img, dtype=np.uint8))
    height, width = img_data.shape[:2]
    buffer = img_data.tobytes()
    # copy() detaches the QImage from the temporary byte buffer
    return QImage(buffer, width, height, 4 * width, QImage.Format_RGBA8888).copy()


class AssetPool:
    """Resolves source identifiers into shared AssetHandles

    resolve() never blocks: new handles are queued and decoded on the
    next process_pending() call. When a scheduler is given (the window
    passes a zero-delay QTimer), process_pending() is scheduled once per
    batch of requests.

    Listeners are called as callback(handle) once per handle, when it
    becomes READY or FAILED.
    """

    def __init__(self, decoder: Optional[Callable[[str], QImage]] = None,
                 scheduler: Optional[Callable[[Callable[[], None]], None]] = None):
        self._logger = logging.getLogger('AssetPool')
        self._decoder = decoder or decode_image_source
        self._scheduler = scheduler
        self._handles: Dict[str, AssetHandle] = {}
        self._pending: List[str] = []
        self._scheduled = False
        self._listeners = []

    # ========================================
    # Resolution
    # ========================================

    def resolve(self, source: Optional[str]) -> Optional[AssetHandle]:
        """Get (or start loading) the handle for a source

        Returns:
            The shared handle, or None for an empty source
        """
        if not source:
            return None
        handle = self._handles.get(source)
        if handle is None:
            handle = AssetHandle(source)
            self._handles[source] = handle
            self._pending.append(source)
            self._schedule()
        return handle

    def resolve_all(self, sources: Iterable[str]) -> None:
        for source in sources:
            self.resolve(source)

    def get(self, source: Optional[str]) -> Optional[AssetHandle]:
        """Existing handle for source without queuing a load."""
        if not source:
            return None
        return self._handles.get(source)

    def is_ready(self, source: Optional[str]) -> bool:
        handle = self.get(source)
        return handle is not None and handle.is_ready()

    @property
    def has_pending(self) -> bool:
        return bool(self._pending)

    def process_pending(self) -> int:
        """Decode every queued source

        Returns:
            Number of handles settled (READY or FAILED)
        """
        self._scheduled = False
        pending, self._pending = self._pending, []
        for source in pending:
            handle = self._handles[source]
            try:
                handle.image = self._decoder(source)
                handle.state = AssetState.READY
                self._logger.debug(f"Loaded asset {source[:60]} "
                                   f"({handle.natural_width}x{handle.natural_height})")
            except Exception as e:
                # Localized to this handle; render falls back to a placeholder
                handle.state = AssetState.FAILED
                handle.error = str(e)
                self._logger.warning(f"Failed to load asset {source[:60]}: {e}")
            self._notify_listeners(handle)
        return len(pending)

    def _schedule(self):
        if self._scheduler is not None and not self._scheduled:
            self._scheduled = True
            self._scheduler(self.process_pending)

    # ========================================
    # Listeners
    # ========================================

    def add_listener(self, callback):
        """Add listener called with the handle when it settles

        Args:
            callback: Function(handle)
        """
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify_listeners(self, handle):
        for listener in list(self._listeners):
            try:
                listener(handle)
            except Exception:
                self._logger.exception("Error in asset listener")
