"""Main window mixins: menus, config/autosave and engine event handling."""
