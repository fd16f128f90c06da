"""Layer list with visibility, naming and per-layer shadow controls."""

from PyQt5.QtWidgets import (QWidget, QVBoxLayout, QHBoxLayout, QListWidget, QListWidgetItem,
							 QPushButton, QGroupBox, QFormLayout, QCheckBox, QSpinBox,
							 QDoubleSpinBox, QLabel)
from PyQt5.QtCore import Qt

from models.scene import ShadowConfig
from engine import LAYERS_CHANGED, SCENE_LOADED
from components.ui_helpers import create_color_button, set_button_color, pick_color


class LayerPanel(QWidget):
	"""Mirrors the engine's layers; edits go through the engine so they are recorded"""
	
	def __init__(self, engine, parent=None):
		super().__init__(parent)
		self.engine = None
		self._updating = False
		
		layout = QVBoxLayout(self)
		layout.setContentsMargins(6, 6, 6, 6)
		layout.addWidget(QLabel("Layers"))
		
		# Topmost layer is listed first
		self.layer_list = QListWidget()
		self.layer_list.currentRowChanged.connect(self._on_current_row_changed)
		self.layer_list.itemChanged.connect(self._on_item_changed)
		layout.addWidget(self.layer_list, 1)
		
		buttons = QHBoxLayout()
		self.add_button = QPushButton("Add")
		self.add_button.clicked.connect(lambda: self.engine.add_layer())
		self.remove_button = QPushButton("Remove")
		self.remove_button.clicked.connect(lambda: self.engine.remove_active_layer())
		buttons.addWidget(self.add_button)
		buttons.addWidget(self.remove_button)
		layout.addLayout(buttons)
		
		shadow_group = QGroupBox("Shadow")
		form = QFormLayout(shadow_group)
		self.shadow_enabled = QCheckBox("Enabled")
		self.shadow_enabled.toggled.connect(self._on_shadow_edited)
		form.addRow(self.shadow_enabled)
		
		self.shadow_angle = QSpinBox()
		self.shadow_angle.setRange(0, 359)
		self.shadow_angle.setWrapping(True)
		self.shadow_angle.setSuffix("°")
		self.shadow_angle.editingFinished.connect(self._on_shadow_edited)
		form.addRow("Angle", self.shadow_angle)
		
		self.shadow_offset = QDoubleSpinBox()
		self.shadow_offset.setRange(0.0, 4.0)
		self.shadow_offset.setSingleStep(0.05)
		self.shadow_offset.setSuffix(" cells")
		self.shadow_offset.editingFinished.connect(self._on_shadow_edited)
		form.addRow("Offset", self.shadow_offset)
		
		self.shadow_color_button = create_color_button(ShadowConfig().color, "Shadow color")
		self.shadow_color_button.clicked.connect(self._on_shadow_color_clicked)
		form.addRow("Color", self.shadow_color_button)
		layout.addWidget(shadow_group)
		
		self.set_engine(engine)
	
	def set_engine(self, engine):
		if self.engine is not None:
			self.engine.remove_listener(LAYERS_CHANGED, self.refresh)
			self.engine.remove_listener(SCENE_LOADED, self.refresh)
		self.engine = engine
		engine.add_listener(LAYERS_CHANGED, self.refresh)
		engine.add_listener(SCENE_LOADED, self.refresh)
		self.refresh()
	
	# ========================================
	# Model -> UI
	# ========================================
	
	def _row_for_index(self, index):
		return self.engine.scene.layer_count - 1 - index
	
	def _index_for_row(self, row):
		return self.engine.scene.layer_count - 1 - row
	
	def refresh(self):
		"""Rebuild the list and shadow controls from the scene"""
		scene = self.engine.scene
		self._updating = True
		try:
			self.layer_list.clear()
			for layer in reversed(scene.layers):
				item = QListWidgetItem(layer.name)
				item.setFlags(item.flags() | Qt.ItemIsEditable | Qt.ItemIsUserCheckable)
				item.setCheckState(Qt.Checked if layer.visible else Qt.Unchecked)
				self.layer_list.addItem(item)
			self.layer_list.setCurrentRow(self._row_for_index(scene.active_layer_index))
			self.remove_button.setEnabled(scene.layer_count > 1)
			
			shadow = scene.active_layer.shadow
			self.shadow_enabled.setChecked(shadow.enabled)
			self.shadow_angle.setValue(int(round(shadow.angle)) % 360)
			self.shadow_offset.setValue(shadow.offset)
			set_button_color(self.shadow_color_button, shadow.color)
		finally:
			self._updating = False
	
	# ========================================
	# UI -> engine
	# ========================================
	
	def _on_current_row_changed(self, row):
		if self._updating or row < 0:
			return
		self.engine.set_active_layer(self._index_for_row(row))
	
	def _on_item_changed(self, item):
		if self._updating:
			return
		index = self._index_for_row(self.layer_list.row(item))
		layer = self.engine.scene.get_layer(index)
		visible = item.checkState() == Qt.Checked
		if visible != layer.visible:
			self.engine.set_layer_visible(index, visible)
		name = item.text().strip()
		if name and name != layer.name:
			self.engine.rename_layer(index, name)
	
	def _current_shadow(self):
		return self.engine.scene.active_layer.shadow
	
	def _on_shadow_edited(self, *args):
		if self._updating:
			return
		current = self._current_shadow()
		shadow = ShadowConfig(
			enabled=self.shadow_enabled.isChecked(),
			angle=float(self.shadow_angle.value()),
			offset=float(self.shadow_offset.value()),
			color=current.color,
		)
		self.engine.set_layer_shadow(self.engine.scene.active_layer_index, shadow)
	
	def _on_shadow_color_clicked(self):
		current = self._current_shadow()
		color = pick_color(self, current.color, "Shadow Color", with_alpha=True)
		if color is None:
			return
		shadow = current.copy()
		shadow.color = color
		self.engine.set_layer_shadow(self.engine.scene.active_layer_index, shadow)
