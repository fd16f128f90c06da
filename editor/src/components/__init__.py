"""UI components for the Grid Map Editor

Direct imports:
"""

from .canvas_widget import CanvasWidget
from .layer_panel import LayerPanel
from .tool_panel import ToolPanel

__all__ = [
    'CanvasWidget',
    'LayerPanel',
    'ToolPanel',
]
