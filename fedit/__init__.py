"""A simple terminal text editor with selection, clipboard and undo."""

__version__ = "1.0.0"
__all__ = ["__version__"]