"""
Scene Internal Package - DO NOT IMPORT FROM HERE

This package contains INTERNAL implementation for the Scene model:
- layer.py: GridCell, cell fills, ShadowConfig and Layer
- entities.py: FreeformMark and PlacedObject
- settings.py: SceneSettings and its style sections
- scene_serializer.py: snapshot record validation and conversion

FORBIDDEN: Do not import from models.scene._internal.* directly
CORRECT: Import from models.scene (the public API)

Example:
    from models.scene import Scene, Layer, GridCell, ColorFill
"""

# This package is internal - do not populate __all__
# External code must use models.scene
