"""Observer interface and coalescing frame scheduler for the editor engine."""

import logging

SELECTION_CHANGED = 'selection_changed'
LAYERS_CHANGED = 'layers_changed'
HISTORY_CHANGED = 'history_changed'
REDRAW_REQUESTED = 'redraw_requested'
SCENE_LOADED = 'scene_loaded'
NOTICE = 'notice'

EVENT_NAMES = (
    SELECTION_CHANGED,
    LAYERS_CHANGED,
    HISTORY_CHANGED,
    REDRAW_REQUESTED,
    SCENE_LOADED,
    NOTICE,
)


class EventHub:
    """Named-event listener registry

    Callbacks receive the positional arguments passed to emit():
        history_changed(can_undo, can_redo)
        notice(message)
        every other event takes no arguments
    """

    def __init__(self):
        self._logger = logging.getLogger('Events')
        self._listeners = {name: [] for name in EVENT_NAMES}

    def add_listener(self, event, callback):
        """Register callback for event

        Raises:
            ValueError: If event is not a known event name
        """
        if event not in self._listeners:
            raise ValueError(f"Unknown event: {event!r}")
        if callback not in self._listeners[event]:
            self._listeners[event].append(callback)

    def remove_listener(self, event, callback):
        if event in self._listeners and callback in self._listeners[event]:
            self._listeners[event].remove(callback)

    def emit(self, event, *args):
        """Call every listener for event; a failing listener is logged and skipped"""
        for callback in list(self._listeners[event]):
            try:
                callback(*args)
            except Exception:
                self._logger.exception(f"Error in '{event}' listener")


class FrameScheduler:
    """Collapses any number of redraw requests between two frames into one.

    request() emits redraw_requested only when no frame is pending;
    the widget calls frame_rendered() at the start of its paint.
    """

    def __init__(self, events: EventHub):
        self._events = events
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    def request(self) -> bool:
        """Returns True if this call actually emitted a redraw request"""
        if self._pending:
            return False
        self._pending = True
        self._events.emit(REDRAW_REQUESTED)
        return True

    def frame_rendered(self):
        self._pending = False
