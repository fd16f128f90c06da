"""
Grid Map Editor - File Operations Service

This module handles file I/O for map snapshot records.
Separates file operations from UI logic and from the engine.
"""

import json
import logging

from models.scene import InvalidSnapshotError, validate_record

_logger = logging.getLogger('FileOperations')


def save_scene_to_file(record, filename):
    """Save a snapshot record to a JSON file

    Args:
        record: Snapshot record dictionary
        filename: Path to save file

    Raises:
        OSError: If file write fails
    """
    with open(filename, 'w', encoding='utf-8') as f:
        json.dump(record, f, indent=2)

    _logger.info(f"Map saved to {filename}")


def load_scene_from_file(filename):
    """Load and validate a snapshot record from a JSON file

    Args:
        filename: Path to map file

    Returns:
        Snapshot record dictionary (shape-validated)

    Raises:
        OSError: If the file cannot be read
        InvalidSnapshotError: If the file is not JSON or lacks required sections
    """
    with open(filename, 'r', encoding='utf-8') as f:
        text = f.read()

    try:
        record = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidSnapshotError(f"Not a valid map file (bad JSON): {e}") from e

    validate_record(record)

    _logger.info(f"Map loaded from {filename}")
    return record


def scene_to_json_text(record):
    """Serialize a record to a JSON string (used for autosave)."""
    return json.dumps(record)


def scene_from_json_text(text):
    """Parse and validate a record from a JSON string

    Raises:
        InvalidSnapshotError: If the text is not JSON or lacks required sections
    """
    try:
        record = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidSnapshotError(f"Not a valid map record (bad JSON): {e}") from e
    validate_record(record)
    return record
