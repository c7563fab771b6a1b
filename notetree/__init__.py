"""notetree - render linked notes as a navigable text tree."""

__version__ = "0.1.0"
