"""
Grid Map Editor - Snapshot Record Serializer

Converts between the live scene parts and the snapshot record format:

    {
        "layers":  [{"name", "visible", "shadowConfig", "cells": [[key, cellData], ...]}],
        "marks":   [[id, markData], ...],
        "objects": [[id, objData], ...],
        "settings": {"cellSize", "viewOffset", "viewScale", "activeLayerIndex",
                     "emptyCellStyle", "borderStyle", "gridAssetList",
                     "drawDefaults", "markDefaults", "objectAssetRef"},
        "version", "appName"
    }

Parsing is all-or-nothing: a record is fully decoded into a ParsedScene
before the caller touches live state, so a malformed record never leaves
the scene half-restored.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from .layer import Layer
from .entities import FreeformMark, PlacedObject
from .settings import SceneSettings
from constants import APP_NAME, SAVE_FILE_VERSION, DEFAULT_LAYER_NAME

_logger = logging.getLogger('SceneSerializer')

REQUIRED_SECTIONS = ('layers', 'settings')


class InvalidSnapshotError(ValueError):
    """Raised when a snapshot record is missing sections or is malformed."""


@dataclass
class ParsedScene:
    layers: List[Layer]
    marks: List[Tuple[str, FreeformMark]]
    objects: List[Tuple[str, PlacedObject]]
    settings: SceneSettings
    view_offset: Tuple[float, float]
    view_scale: float
    active_layer_index: int


def validate_record(record: Any) -> None:
    """Check the top-level shape of a snapshot record

    Raises:
        InvalidSnapshotError: If the record is not a dict, lacks a required
            section, or a section has the wrong container type
    """
    if not isinstance(record, dict):
        raise InvalidSnapshotError(f"Snapshot must be an object, got {type(record).__name__}")

    missing = [name for name in REQUIRED_SECTIONS if name not in record]
    if missing:
        raise InvalidSnapshotError(f"Snapshot is missing required section(s): {', '.join(missing)}")

    if not isinstance(record['layers'], list):
        raise InvalidSnapshotError("Snapshot 'layers' must be a list")
    if not isinstance(record['settings'], dict):
        raise InvalidSnapshotError("Snapshot 'settings' must be an object")
    for name in ('marks', 'objects'):
        if name in record and not isinstance(record[name], list):
            raise InvalidSnapshotError(f"Snapshot '{name}' must be a list of [id, data] pairs")


def _parse_entities(entries: List, factory, kind: str) -> List[Tuple[str, Any]]:
    result = []
    seen = set()
    for entry in entries:
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise ValueError(f"{kind} entry must be an [id, data] pair: {entry!r}")
        entity_id = str(entry[0])
        if entity_id in seen:
            raise ValueError(f"Duplicate {kind} id: {entity_id}")
        seen.add(entity_id)
        result.append((entity_id, factory(entry[1])))
    return result


def parse_record(record: Any) -> ParsedScene:
    """Decode a snapshot record without touching any live scene

    Raises:
        InvalidSnapshotError: If the record is malformed at any depth
    """
    validate_record(record)
    try:
        layers = [Layer.from_dict(data) for data in record['layers']]
        if not layers:
            # An empty layer list would break the at-least-one-layer invariant
            _logger.debug("Snapshot has no layers; creating a default layer")
            layers = [Layer(DEFAULT_LAYER_NAME.format(1))]

        marks = _parse_entities(record.get('marks', []), FreeformMark.from_dict, 'mark')
        objects = _parse_entities(record.get('objects', []), PlacedObject.from_dict, 'object')

        settings_data = record['settings']
        settings = SceneSettings.from_dict(settings_data)

        offset = settings_data.get('viewOffset') or {}
        if isinstance(offset, dict):
            view_offset = (float(offset.get('x', 0.0)), float(offset.get('y', 0.0)))
        else:
            view_offset = (float(offset[0]), float(offset[1]))
        view_scale = float(settings_data.get('viewScale', 1.0))

        active = int(settings_data.get('activeLayerIndex', 0))
        active = max(0, min(active, len(layers) - 1))
    except InvalidSnapshotError:
        raise
    except (ValueError, KeyError, TypeError, IndexError) as e:
        raise InvalidSnapshotError(f"Malformed snapshot: {e}") from e

    return ParsedScene(
        layers=layers,
        marks=marks,
        objects=objects,
        settings=settings,
        view_offset=view_offset,
        view_scale=view_scale,
        active_layer_index=active,
    )


def build_record(layers, marks, objects, settings: SceneSettings,
                 view_offset: Tuple[float, float], view_scale: float,
                 active_layer_index: int) -> Dict:
    """Build a fresh snapshot record

    Args:
        layers: Ordered layers
        marks: Iterable of (id, FreeformMark) in z-order
        objects: Iterable of (id, PlacedObject) in z-order
        settings: Scene settings
        view_offset: Pan offset (x, y)
        view_scale: Zoom scale
        active_layer_index: Index of the active layer

    Returns:
        Record dict containing only plain JSON-compatible values
    """
    settings_data = settings.to_dict()
    settings_data['viewOffset'] = {'x': view_offset[0], 'y': view_offset[1]}
    settings_data['viewScale'] = view_scale
    settings_data['activeLayerIndex'] = active_layer_index

    return {
        'layers': [layer.to_dict() for layer in layers],
        'marks': [[mark_id, mark.to_dict()] for mark_id, mark in marks],
        'objects': [[obj_id, obj.to_dict()] for obj_id, obj in objects],
        'settings': settings_data,
        'version': SAVE_FILE_VERSION,
        'appName': APP_NAME,
    }
