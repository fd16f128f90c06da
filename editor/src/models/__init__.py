"""
Grid Map Editor - Data Models

This module contains the data model classes for the map scene.
This is the MODEL in MVC architecture.

Public API: Import Scene and the entity types from models.scene
The models/scene/_internal/ subdirectory contains internal implementation only.
"""

from .scene import Scene, Layer, GridCell, FreeformMark, PlacedObject
from .selection import Selection

__all__ = ['Scene', 'Layer', 'GridCell', 'FreeformMark', 'PlacedObject', 'Selection']
