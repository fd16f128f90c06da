"""Window action handlers (composition helpers for the main window)."""
