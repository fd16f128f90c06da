"""Rendering, asset loading and file I/O services."""
