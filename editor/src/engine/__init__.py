"""Editor engine: input gestures, commands and undo history over a Scene."""

from engine.core import EditorEngine
from engine.events import (
    EventHub, FrameScheduler,
    SELECTION_CHANGED, LAYERS_CHANGED, HISTORY_CHANGED,
    REDRAW_REQUESTED, SCENE_LOADED, NOTICE,
)
from engine.gesture_mixin import Instrument, MouseButton

__all__ = [
    'EditorEngine',
    'EventHub', 'FrameScheduler',
    'SELECTION_CHANGED', 'LAYERS_CHANGED', 'HISTORY_CHANGED',
    'REDRAW_REQUESTED', 'SCENE_LOADED', 'NOTICE',
    'Instrument', 'MouseButton',
]
