"""Instrument defaults and map-wide settings (cell size, textures, border, empty cells)."""

import os

from PyQt5.QtWidgets import (QWidget, QVBoxLayout, QGroupBox, QFormLayout, QComboBox,
							 QDoubleSpinBox, QSpinBox, QPushButton, QCheckBox)

from models.color import Color
from models.scene import FILL_MODE_COLOR, FILL_MODE_TEXTURED
from engine import SCENE_LOADED
from components.ui_helpers import create_color_button, set_button_color, pick_color, pick_image_source
from constants import MIN_CELL_SIZE, MAX_CELL_SIZE


def _source_label(source):
	return os.path.basename(source) if source else "(none)"


class ToolPanel(QWidget):
	"""Edits SceneSettings through the engine's setters"""

	def __init__(self, engine, parent=None):
		super().__init__(parent)
		self.engine = None
		self._updating = False
		placeholder = Color(0, 0, 0)

		layout = QVBoxLayout(self)
		layout.setContentsMargins(6, 6, 6, 6)

		# Grid draw
		draw_group = QGroupBox("Grid Draw")
		draw_form = QFormLayout(draw_group)
		self.fill_mode_combo = QComboBox()
		self.fill_mode_combo.addItem("Color", FILL_MODE_COLOR)
		self.fill_mode_combo.addItem("Textured", FILL_MODE_TEXTURED)
		self.fill_mode_combo.currentIndexChanged.connect(self._on_fill_mode_changed)
		draw_form.addRow("Fill", self.fill_mode_combo)

		self.draw_fill_button = create_color_button(placeholder, "Cell fill color")
		self.draw_fill_button.clicked.connect(self._on_draw_fill_clicked)
		draw_form.addRow("Fill color", self.draw_fill_button)

		self.draw_border_button = create_color_button(placeholder, "Cell border color")
		self.draw_border_button.clicked.connect(self._on_draw_border_clicked)
		draw_form.addRow("Border color", self.draw_border_button)

		self.texture_button = QPushButton()
		self.texture_button.clicked.connect(self._on_texture_clicked)
		draw_form.addRow("Texture", self.texture_button)
		layout.addWidget(draw_group)

		# Free draw
		mark_group = QGroupBox("Free Draw")
		mark_form = QFormLayout(mark_group)
		self.mark_size_spin = QDoubleSpinBox()
		self.mark_size_spin.setRange(0.05, 16.0)
		self.mark_size_spin.setSingleStep(0.25)
		self.mark_size_spin.setSuffix(" cells")
		self.mark_size_spin.editingFinished.connect(self._on_mark_spin_changed)
		mark_form.addRow("Size", self.mark_size_spin)

		self.mark_period_spin = QDoubleSpinBox()
		self.mark_period_spin.setRange(0.0, 16.0)
		self.mark_period_spin.setSingleStep(0.25)
		self.mark_period_spin.setSuffix(" cells")
		self.mark_period_spin.editingFinished.connect(self._on_mark_spin_changed)
		mark_form.addRow("Spacing", self.mark_period_spin)

		self.mark_fill_button = create_color_button(placeholder, "Mark fill color")
		self.mark_fill_button.clicked.connect(self._on_mark_fill_clicked)
		mark_form.addRow("Fill color", self.mark_fill_button)

		self.mark_stroke_button = create_color_button(placeholder, "Mark stroke color")
		self.mark_stroke_button.clicked.connect(self._on_mark_stroke_clicked)
		mark_form.addRow("Stroke color", self.mark_stroke_button)
		layout.addWidget(mark_group)

		# Objects
		object_group = QGroupBox("Objects")
		object_form = QFormLayout(object_group)
		self.object_button = QPushButton()
		self.object_button.clicked.connect(self._on_object_clicked)
		object_form.addRow("Image", self.object_button)
		layout.addWidget(object_group)

		# Map
		map_group = QGroupBox("Map")
		map_form = QFormLayout(map_group)
		self.cell_size_spin = QSpinBox()
		self.cell_size_spin.setRange(MIN_CELL_SIZE, MAX_CELL_SIZE)
		self.cell_size_spin.editingFinished.connect(self._on_cell_size_changed)
		map_form.addRow("Cell size", self.cell_size_spin)

		self.empty_fill_button = create_color_button(placeholder, "Empty cell color")
		self.empty_fill_button.clicked.connect(self._on_empty_fill_clicked)
		map_form.addRow("Empty fill", self.empty_fill_button)

		self.empty_pattern_button = QPushButton()
		self.empty_pattern_button.clicked.connect(self._on_empty_pattern_clicked)
		map_form.addRow("Empty pattern", self.empty_pattern_button)

		self.border_enabled = QCheckBox("Border strips")
		self.border_enabled.toggled.connect(self._on_border_toggled)
		map_form.addRow(self.border_enabled)

		self.border_image_button = QPushButton()
		self.border_image_button.clicked.connect(self._on_border_image_clicked)
		map_form.addRow("Border image", self.border_image_button)
		layout.addWidget(map_group)

		layout.addStretch(1)
		self.set_engine(engine)

	def set_engine(self, engine):
		if self.engine is not None:
			self.engine.remove_listener(SCENE_LOADED, self.refresh)
		self.engine = engine
		engine.add_listener(SCENE_LOADED, self.refresh)
		self.refresh()

	@property
	def _settings(self):
		return self.engine.scene.settings

	def refresh(self):
		"""Sync every control from the scene settings"""
		settings = self._settings
		draw = settings.draw_defaults
		marks = settings.mark_defaults
		self._updating = True
		try:
			self.fill_mode_combo.setCurrentIndex(self.fill_mode_combo.findData(draw.fill_mode))
			set_button_color(self.draw_fill_button, draw.fill_color)
			set_button_color(self.draw_border_button, draw.border_color)
			self.texture_button.setText(_source_label(draw.asset))

			self.mark_size_spin.setValue(marks.size)
			self.mark_period_spin.setValue(marks.period)
			set_button_color(self.mark_fill_button, marks.fill_color)
			set_button_color(self.mark_stroke_button, marks.stroke_color)

			self.object_button.setText(_source_label(settings.object_asset_ref))

			self.cell_size_spin.setValue(int(settings.cell_size))
			set_button_color(self.empty_fill_button, settings.empty_cell_style.fill_color)
			self.empty_pattern_button.setText(_source_label(settings.empty_cell_style.pattern))
			self.border_enabled.setChecked(settings.border_style.enabled)
			self.border_image_button.setText(_source_label(settings.border_style.image))
		finally:
			self._updating = False

	# ========================================
	# Grid draw
	# ========================================

	def _on_fill_mode_changed(self, index):
		if self._updating:
			return
		self.engine.set_draw_fill(fill_mode=self.fill_mode_combo.itemData(index))

	def _on_draw_fill_clicked(self):
		color = pick_color(self, self._settings.draw_defaults.fill_color, "Cell Fill Color")
		if color is not None:
			self.engine.set_draw_fill(fill_color=color)
			set_button_color(self.draw_fill_button, color)

	def _on_draw_border_clicked(self):
		color = pick_color(self, self._settings.draw_defaults.border_color, "Cell Border Color")
		if color is not None:
			self.engine.set_draw_fill(border_color=color)
			set_button_color(self.draw_border_button, color)

	def _on_texture_clicked(self):
		source = pick_image_source(self, "Select Cell Texture")
		if source is None:
			return
		palette = self._settings.grid_asset_list
		if source not in palette:
			self.engine.set_grid_assets(palette + [source])
		self.engine.set_draw_fill(fill_mode=FILL_MODE_TEXTURED, asset=source)
		self.refresh()

	# ========================================
	# Free draw
	# ========================================

	def _on_mark_spin_changed(self):
		if self._updating:
			return
		self.engine.set_mark_defaults(size=self.mark_size_spin.value(),
									  period=self.mark_period_spin.value())

	def _on_mark_fill_clicked(self):
		color = pick_color(self, self._settings.mark_defaults.fill_color, "Mark Fill Color", with_alpha=True)
		if color is not None:
			self.engine.set_mark_defaults(fill_color=color)
			set_button_color(self.mark_fill_button, color)

	def _on_mark_stroke_clicked(self):
		color = pick_color(self, self._settings.mark_defaults.stroke_color, "Mark Stroke Color", with_alpha=True)
		if color is not None:
			self.engine.set_mark_defaults(stroke_color=color)
			set_button_color(self.mark_stroke_button, color)

	# ========================================
	# Objects and map
	# ========================================

	def _on_object_clicked(self):
		source = pick_image_source(self, "Select Object Image")
		if source is not None:
			self.engine.set_object_asset(source)
			self.object_button.setText(_source_label(source))

	def _on_cell_size_changed(self):
		if self._updating:
			return
		if not self.engine.update_cell_size(self.cell_size_spin.value()):
			self.cell_size_spin.setValue(int(self._settings.cell_size))

	def _on_empty_fill_clicked(self):
		color = pick_color(self, self._settings.empty_cell_style.fill_color, "Empty Cell Color")
		if color is not None:
			self.engine.set_empty_cell_style(fill_color=color)
			set_button_color(self.empty_fill_button, color)

	def _on_empty_pattern_clicked(self):
		source = pick_image_source(self, "Select Empty Cell Pattern")
		if source is not None:
			self.engine.set_empty_cell_style(pattern=source)
			self.empty_pattern_button.setText(_source_label(source))

	def _on_border_toggled(self, checked):
		if self._updating:
			return
		self.engine.set_border_style(checked)

	def _on_border_image_clicked(self):
		source = pick_image_source(self, "Select Border Image")
		if source is not None:
			self.engine.set_border_style(True, source)
			self.refresh()
