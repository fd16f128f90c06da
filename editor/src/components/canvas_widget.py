"""
Grid Map Editor - Canvas Widget

QWidget surface that forwards input to the EditorEngine and paints the
scene through SceneRenderer. Redraws are driven by the engine's frame
scheduler: any number of requests between two paints yield one update().
"""

# PyQt5 imports
from PyQt5.QtWidgets import QWidget, QSizePolicy
from PyQt5.QtCore import Qt, QSize
from PyQt5.QtGui import QPainter, QImage, QColor

import math
import logging

from engine import EditorEngine, MouseButton, REDRAW_REQUESTED
from services.scene_renderer import SceneRenderer
from constants import DEFAULT_EXPORT_PIXELS_PER_CELL, ROTATE_STEP_DEGREES, SCALE_UP_FACTOR, SCALE_DOWN_FACTOR


_BUTTONS = {
	Qt.LeftButton: MouseButton.LEFT,
	Qt.MiddleButton: MouseButton.MIDDLE,
	Qt.RightButton: MouseButton.RIGHT,
}


class CanvasWidget(QWidget):
	"""Interactive grid map canvas"""

	def __init__(self, engine: EditorEngine, parent=None):
		super().__init__(parent)
		self._logger = logging.getLogger('Canvas')
		self.engine = engine
		self.renderer = SceneRenderer(engine.scene, engine.assets)

		self.setMouseTracking(True)
		self.setFocusPolicy(Qt.StrongFocus)
		self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
		self.setAttribute(Qt.WA_OpaquePaintEvent, True)

		engine.add_listener(REDRAW_REQUESTED, self.update)

	def sizeHint(self):
		return QSize(800, 600)

	# ========================================
	# Painting
	# ========================================

	def paintEvent(self, event):
		# Clear first so requests made during the paint schedule another frame
		self.engine.frames.frame_rendered()
		painter = QPainter(self)
		try:
			painter.setRenderHint(QPainter.Antialiasing, True)
			painter.setRenderHint(QPainter.SmoothPixmapTransform, True)
			self.renderer.render_viewport(painter, self.width(), self.height(),
										  self.engine.drag_rect)
		finally:
			painter.end()

	def export_image(self, pixels_per_cell=DEFAULT_EXPORT_PIXELS_PER_CELL):
		"""Render the whole map to a new image

		Args:
			pixels_per_cell: Output size of one grid cell in pixels

		Returns:
			QImage (ARGB32) covering the map's logical bounding box
		"""
		if pixels_per_cell <= 0:
			raise ValueError(f"pixels_per_cell must be positive, got {pixels_per_cell}")
		bbox = self.engine.scene.logical_bounding_box()
		width = max(1, math.ceil(bbox.width * pixels_per_cell))
		height = max(1, math.ceil(bbox.height * pixels_per_cell))

		image = QImage(width, height, QImage.Format_ARGB32)
		image.fill(QColor(0, 0, 0, 0))
		painter = QPainter(image)
		try:
			painter.setRenderHint(QPainter.Antialiasing, True)
			painter.setRenderHint(QPainter.SmoothPixmapTransform, True)
			painter.scale(pixels_per_cell, pixels_per_cell)
			painter.translate(-bbox.min_x, -bbox.min_y)
			self.renderer.render_export(painter)
		finally:
			painter.end()
		self._logger.debug(f"Exported {width}x{height} image ({pixels_per_cell} px/cell)")
		return image

	def export_to_png(self, filename, pixels_per_cell=DEFAULT_EXPORT_PIXELS_PER_CELL):
		"""Returns:
			True if the image was written
		"""
		return self.export_image(pixels_per_cell).save(filename, "PNG")

	# ========================================
	# Mouse Events
	# ========================================

	def mousePressEvent(self, event):
		button = _BUTTONS.get(event.button())
		if button is None:
			super().mousePressEvent(event)
			return
		self.engine.pointer_down(event.x(), event.y(), button)
		event.accept()

	def mouseMoveEvent(self, event):
		self.engine.pointer_move(event.x(), event.y())
		event.accept()

	def mouseReleaseEvent(self, event):
		button = _BUTTONS.get(event.button())
		if button is None:
			super().mouseReleaseEvent(event)
			return
		self.engine.pointer_up(event.x(), event.y(), button)
		event.accept()

	def wheelEvent(self, event):
		"""Zoom around the cursor; scrolling up zooms in"""
		pos = event.pos()
		self.engine.wheel(pos.x(), pos.y(), -event.angleDelta().y())
		event.accept()

	# ========================================
	# Keyboard
	# ========================================

	def keyPressEvent(self, event):
		key = event.key()
		if key in (Qt.Key_Delete, Qt.Key_Backspace):
			self.engine.delete_selection()
		elif key == Qt.Key_R:
			step = -ROTATE_STEP_DEGREES if event.modifiers() & Qt.ShiftModifier else ROTATE_STEP_DEGREES
			self.engine.rotate_selection(step)
		elif key in (Qt.Key_Plus, Qt.Key_Equal):
			self.engine.resize_selection(SCALE_UP_FACTOR)
		elif key == Qt.Key_Minus:
			self.engine.resize_selection(SCALE_DOWN_FACTOR)
		elif key == Qt.Key_Escape:
			self.engine.cancel_gesture()
			self.engine.clear_selection()
		else:
			super().keyPressEvent(event)
			return
		event.accept()
