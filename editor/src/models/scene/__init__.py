"""Scene model package"""

from .layer_mixin import SceneLayerMixin
from .drawing_mixin import SceneDrawingMixin
from .query_mixin import SceneQueryMixin, HitResult, HIT_OBJECT, HIT_MARK, HIT_CELL
from .transform_mixin import SceneTransformMixin
from .clipboard_mixin import SceneClipboardMixin, ClipboardContent
from .serialization_mixin import SceneSerializationMixin
from .core import Scene
from ._internal.layer import (
    Layer, GridCell, ColorFill, TexturedFill, ShadowConfig,
    cell_key, parse_cell_key, FILL_MODE_COLOR, FILL_MODE_TEXTURED,
)
from ._internal.entities import FreeformMark, PlacedObject
from ._internal.settings import (
    SceneSettings, EmptyCellStyle, BorderStyle, DrawDefaults, MarkDefaults,
)
from ._internal.scene_serializer import InvalidSnapshotError, validate_record

__all__ = [
    'Scene',
    'Layer',
    'GridCell',
    'ColorFill',
    'TexturedFill',
    'ShadowConfig',
    'FreeformMark',
    'PlacedObject',
    'SceneSettings',
    'EmptyCellStyle',
    'BorderStyle',
    'DrawDefaults',
    'MarkDefaults',
    'HitResult',
    'HIT_OBJECT',
    'HIT_MARK',
    'HIT_CELL',
    'ClipboardContent',
    'InvalidSnapshotError',
    'validate_record',
    'cell_key',
    'parse_cell_key',
    'FILL_MODE_COLOR',
    'FILL_MODE_TEXTURED',
    'SceneLayerMixin',
    'SceneDrawingMixin',
    'SceneQueryMixin',
    'SceneTransformMixin',
    'SceneClipboardMixin',
    'SceneSerializationMixin',
]
