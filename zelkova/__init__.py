"""Note vault configuration, keymaps, file watching, a command palette model and daemon control."""

__version__ = "0.2.0"