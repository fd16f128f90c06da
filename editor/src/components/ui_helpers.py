"""Shared UI helper functions for components"""

from PyQt5.QtWidgets import QColorDialog, QFileDialog, QPushButton
from PyQt5.QtGui import QColor

from models.color import Color

IMAGE_FILE_FILTER = "Images (*.png *.jpg *.jpeg *.bmp *.gif *.webp);;All Files (*)"


def color_from_qcolor(qcolor: QColor) -> Color:
    return Color(qcolor.red(), qcolor.green(), qcolor.blue(), qcolor.alpha())


def pick_color(parent, initial: Color, title="Select Color", with_alpha=False):
    """Open a color dialog

    Returns:
        The chosen Color, or None if the dialog was cancelled
    """
    options = QColorDialog.ShowAlphaChannel if with_alpha else QColorDialog.ColorDialogOptions()
    qcolor = QColorDialog.getColor(initial.to_qcolor(), parent, title, options)
    if not qcolor.isValid():
        return None
    return color_from_qcolor(qcolor)


def pick_image_source(parent, title="Select Image"):
    """Ask for an image file

    Returns:
        The file path (used as the asset source), or None if cancelled
    """
    filename, _ = QFileDialog.getOpenFileName(parent, title, "", IMAGE_FILE_FILTER)
    return filename or None


def create_color_button(color: Color, tooltip=""):
    """Flat push button showing a color swatch"""
    button = QPushButton()
    button.setFixedSize(40, 22)
    button.setToolTip(tooltip)
    set_button_color(button, color)
    return button


def set_button_color(button, color: Color):
    button.setStyleSheet(
        f"QPushButton {{ background-color: rgba({color.r}, {color.g}, {color.b}, {color.a}); "
        f"border: 1px solid #666; border-radius: 3px; }}"
    )
