"""
Grid Map Editor - Scene Renderer

Pure, repeatable projection of live scene state onto a QPainter.

Draw order:
    background / empty cells
    per visible layer: shadow -> border -> cells
    marks -> objects
    drag-selection rectangle -> selection highlights

Two entry points share the drawing helpers:
    render_viewport(): world units under the view transform, culled to
        the visible rectangle
    render_export(): logical units (one cell = 1.0) over the content
        bounding box; the caller maps logical units to device pixels

Assets that are pending or failed render as flat placeholders.
"""

import math
import logging
from dataclasses import dataclass
from typing import Optional

from PyQt5.QtCore import Qt, QRectF, QPointF
from PyQt5.QtGui import QColor, QPainter, QPen

from models.scene import Scene, TexturedFill
from services.asset_pool import AssetPool
from services.shadow_caster import ShadowCaster
from services.border_renderer import BorderRenderer
from utils.geometry import Bounds
from constants import (
    BACKGROUND_COLOR, ATTENTION_COLOR, ERROR_COLOR,
    SELECTION_RECT_COLOR, SELECTION_HIGHLIGHT_COLOR, EXPORT_GRID_LINE_WIDTH,
)


@dataclass
class FrameStats:
    """What the last render pass actually drew (after culling)."""
    cells: int = 0
    empty_cells: int = 0
    marks: int = 0
    objects: int = 0
    shadow_fragments: int = 0
    border_strips: int = 0


def _cosmetic_pen(color, width: float = 1.0, style=Qt.SolidLine) -> QPen:
    pen = QPen(QColor(color))
    pen.setCosmetic(True)
    pen.setWidthF(width)
    pen.setStyle(style)
    return pen


class SceneRenderer:
    """Draws a Scene using shared asset handles."""

    def __init__(self, scene: Scene, assets: AssetPool,
                 shadow_caster: Optional[ShadowCaster] = None,
                 border_renderer: Optional[BorderRenderer] = None):
        self._logger = logging.getLogger('Renderer')
        self.scene = scene
        self.assets = assets
        self.shadow_caster = shadow_caster or ShadowCaster()
        self.border_renderer = border_renderer or BorderRenderer()
        self.last_stats = FrameStats()

    # ========================================
    # Entry points
    # ========================================

    def visible_bounds(self, width: float, height: float) -> Bounds:
        return self.scene.view.visible_world_bounds(width, height)

    def render_viewport(self, painter: QPainter, width: int, height: int,
                        drag_rect: Optional[Bounds] = None) -> FrameStats:
        """Interactive redraw of a width x height viewport

        Args:
            painter: Active painter on the widget (identity transform)
            width, height: Viewport size in pixels
            drag_rect: In-progress selection rectangle in world units

        Returns:
            FrameStats for this frame
        """
        scene = self.scene
        view = scene.view
        stats = FrameStats()
        cell_size = scene.cell_size
        bounds = self.visible_bounds(width, height)

        painter.save()
        try:
            painter.fillRect(QRectF(0, 0, width, height), QColor(BACKGROUND_COLOR))
            painter.translate(view.offset_x, view.offset_y)
            painter.scale(view.scale, view.scale)

            start_x = math.floor(bounds.min_x / cell_size) - 1
            start_y = math.floor(bounds.min_y / cell_size) - 1
            end_x = math.ceil(bounds.max_x / cell_size) + 1
            end_y = math.ceil(bounds.max_y / cell_size) + 1
            stats.empty_cells = self._draw_empty_cells(painter, cell_size,
                                                       start_x, start_y, end_x, end_y)

            self._draw_layers(painter, cell_size, bounds, stats, export=False)
            self._draw_free_entities(painter, 1.0, bounds, stats)

            if drag_rect is not None:
                self._draw_selection_rect(painter, drag_rect)
            self._draw_selection_highlights(painter, cell_size)
        finally:
            painter.restore()

        self.last_stats = stats
        return stats

    def render_export(self, painter: QPainter) -> Bounds:
        """Full-extent render in logical units

        The painter's transform must map logical units (one cell = 1.0)
        to the output surface; paging and DPI stay with the caller.

        Returns:
            The logical bounding box that was drawn
        """
        bbox = self.scene.logical_bounding_box()
        stats = FrameStats()

        painter.save()
        try:
            self._draw_export_background(painter, bbox)
            self._draw_layers(painter, 1.0, bbox, stats, export=True)
            self._draw_free_entities(painter, 1.0 / self.scene.cell_size, bbox, stats)
        finally:
            painter.restore()

        self.last_stats = stats
        return bbox

    # ========================================
    # Background
    # ========================================

    def _draw_empty_cells(self, painter, cell_size, start_x, start_y, end_x, end_y) -> int:
        style = self.scene.settings.empty_cell_style
        pattern = self.assets.resolve(style.pattern)
        filled = set()
        for layer in self.scene.layers:
            if layer.visible:
                filled |= layer.filled_coords()

        fill = style.fill_color.to_qcolor()
        painter.setPen(_cosmetic_pen(style.border_color.to_qcolor()))
        painter.setBrush(Qt.NoBrush)
        count = 0
        for i in range(start_x, end_x):
            for j in range(start_y, end_y):
                if (i, j) in filled:
                    continue
                rect = QRectF(i * cell_size, j * cell_size, cell_size, cell_size)
                painter.fillRect(rect, fill)
                if pattern is not None and pattern.is_ready():
                    painter.drawImage(rect, pattern.image)
                painter.drawRect(rect)
                count += 1
        return count

    def _draw_export_background(self, painter, bbox: Bounds) -> None:
        style = self.scene.settings.empty_cell_style
        area = QRectF(bbox.min_x, bbox.min_y, bbox.width, bbox.height)
        painter.fillRect(area, style.fill_color.to_qcolor())

        pattern = self.assets.resolve(style.pattern)
        if pattern is not None and pattern.is_ready():
            painter.save()
            painter.setClipRect(area)
            for i in range(math.floor(bbox.min_x), math.ceil(bbox.max_x)):
                for j in range(math.floor(bbox.min_y), math.ceil(bbox.max_y)):
                    painter.drawImage(QRectF(i, j, 1, 1), pattern.image)
            painter.restore()

        pen = QPen(style.border_color.to_qcolor())
        pen.setWidthF(EXPORT_GRID_LINE_WIDTH)
        painter.setPen(pen)
        x = math.ceil(bbox.min_x)
        while x < bbox.max_x:
            painter.drawLine(QPointF(x, bbox.min_y), QPointF(x, bbox.max_y))
            x += 1
        y = math.ceil(bbox.min_y)
        while y < bbox.max_y:
            painter.drawLine(QPointF(bbox.min_x, y), QPointF(bbox.max_x, y))
            y += 1

    # ========================================
    # Layers
    # ========================================

    def _draw_layers(self, painter, cell_size, bounds: Bounds, stats: FrameStats, export: bool):
        settings = self.scene.settings
        border_handle = None
        if settings.border_style.enabled and settings.border_style.image:
            border_handle = self.assets.resolve(settings.border_style.image)

        for layer in self.scene.layers:
            if not layer.visible or layer.cell_count == 0:
                continue

            if layer.shadow.enabled:
                if export:
                    stats.shadow_fragments += self.shadow_caster.render_export(painter, layer, bounds)
                else:
                    stats.shadow_fragments += self.shadow_caster.render_viewport(
                        painter, layer, cell_size, bounds)

            if border_handle is not None:
                stats.border_strips += self.border_renderer.render(
                    painter, layer, cell_size, border_handle, bounds)

            for cell in layer.cells():
                cell_box = Bounds(cell.x * cell_size, cell.y * cell_size,
                                  (cell.x + 1) * cell_size, (cell.y + 1) * cell_size)
                if not cell_box.overlaps(bounds):
                    continue
                self._draw_cell(painter, cell, cell_size, export)
                stats.cells += 1

    def _draw_cell(self, painter, cell, cell_size, export: bool):
        rect = QRectF(cell.x * cell_size, cell.y * cell_size, cell_size, cell_size)
        if isinstance(cell.fill, TexturedFill):
            handle = self.assets.resolve(cell.fill.source)
            if handle.is_ready():
                painter.drawImage(rect, handle.image)
            elif handle.is_failed():
                painter.fillRect(rect, QColor(ERROR_COLOR))
            else:
                painter.fillRect(rect, QColor(ATTENTION_COLOR))
        else:
            painter.fillRect(rect, cell.fill.color.to_qcolor())

        if export:
            pen = QPen(cell.border_color.to_qcolor())
            pen.setWidthF(EXPORT_GRID_LINE_WIDTH)
        else:
            pen = _cosmetic_pen(cell.border_color.to_qcolor())
        painter.setPen(pen)
        painter.setBrush(Qt.NoBrush)
        painter.drawRect(rect)

    # ========================================
    # Marks and objects
    # ========================================

    def _draw_free_entities(self, painter, factor: float, bounds: Bounds, stats: FrameStats):
        """Draw marks then objects; factor converts world units to painter units."""
        for _, mark in self.scene.marks():
            radius = (mark.radius or 0.0) * factor
            cx, cy = mark.x * factor, mark.y * factor
            if not Bounds(cx - radius, cy - radius, cx + radius, cy + radius).overlaps(bounds):
                continue
            self._draw_mark(painter, cx, cy, radius, mark)
            stats.marks += 1

        for _, obj in self.scene.objects():
            cx, cy = obj.x * factor, obj.y * factor
            w, h = obj.width * factor, obj.height * factor
            # Rotation ignored for culling
            if not Bounds(cx - w / 2, cy - h / 2, cx + w / 2, cy + h / 2).overlaps(bounds):
                continue
            self._draw_object(painter, cx, cy, w, h, obj)
            stats.objects += 1

    def _draw_mark(self, painter, cx, cy, radius, mark):
        rect = QRectF(cx - radius, cy - radius, radius * 2, radius * 2)
        handle = self.assets.resolve(mark.asset)
        if handle is not None and handle.is_ready():
            painter.drawImage(rect, handle.image)
            return
        if handle is not None and handle.is_failed():
            painter.setPen(Qt.NoPen)
            painter.setBrush(QColor(ERROR_COLOR))
        else:
            painter.setPen(_cosmetic_pen(mark.stroke_color.to_qcolor()))
            painter.setBrush(mark.fill_color.to_qcolor())
        painter.drawEllipse(rect)

    def _draw_object(self, painter, cx, cy, w, h, obj):
        painter.save()
        try:
            painter.translate(cx, cy)
            painter.rotate(math.degrees(obj.rotation))
            rect = QRectF(-w / 2, -h / 2, w, h)
            handle = self.assets.resolve(obj.asset)
            if handle is not None and handle.is_ready():
                painter.drawImage(rect, handle.image)
            elif handle is not None and handle.is_failed():
                painter.fillRect(rect, QColor(ERROR_COLOR))
            else:
                painter.fillRect(rect, QColor(ATTENTION_COLOR))
                painter.setPen(_cosmetic_pen(Qt.black))
                painter.setBrush(Qt.NoBrush)
                painter.drawRect(rect)
        finally:
            painter.restore()

    # ========================================
    # Selection overlays
    # ========================================

    def _draw_selection_rect(self, painter, rect: Bounds):
        painter.setPen(_cosmetic_pen(SELECTION_RECT_COLOR, 1.0, Qt.DashLine))
        painter.setBrush(Qt.NoBrush)
        painter.drawRect(QRectF(rect.min_x, rect.min_y, rect.width, rect.height))

    def _draw_selection_highlights(self, painter, cell_size):
        scene = self.scene
        selection = scene.selection
        if selection.is_empty():
            return

        painter.setPen(_cosmetic_pen(SELECTION_HIGHLIGHT_COLOR, 2.0))
        painter.setBrush(Qt.NoBrush)

        layer = scene.active_layer
        for key in selection.cell_keys:
            cell = layer.get_cell_by_key(key)
            if cell is not None:
                painter.drawRect(QRectF(cell.x * cell_size, cell.y * cell_size,
                                        cell_size, cell_size))

        for mark_id in selection.mark_ids:
            if scene.has_mark(mark_id):
                mark = scene.get_mark(mark_id)
                r = (mark.radius or 0.0) + 1.0 / scene.view.scale
                painter.drawEllipse(QRectF(mark.x - r, mark.y - r, r * 2, r * 2))

        for obj_id in selection.object_ids:
            if scene.has_object(obj_id):
                obj = scene.get_object(obj_id)
                painter.save()
                painter.translate(obj.x, obj.y)
                painter.rotate(math.degrees(obj.rotation))
                painter.drawRect(QRectF(-obj.width / 2, -obj.height / 2, obj.width, obj.height))
                painter.restore()
