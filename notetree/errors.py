"""
notetree exceptions.

All library errors inherit from NotetreeError. Navigation misses are not
errors: the navigator simply stays where it is.
"""

from __future__ import annotations


class NotetreeError(Exception):
    """Base exception for all notetree errors."""

    pass


class NoteNotFound(NotetreeError):
    """Raised when a referenced identifier cannot be resolved by the store."""

    def __init__(self, identifier: str, path: tuple[str, ...] = ()):
        self.identifier = identifier
        self.path = tuple(path)
        trail = " -> ".join(self.path) if self.path else identifier
        super().__init__(f"Note not found: {identifier} (via {trail})")


class MalformedAttributes(NotetreeError):
    """Raised when a note's metadata cannot be interpreted."""

    def __init__(self, identifier: str, reason: str = ""):
        self.identifier = identifier
        self.reason = reason
        message = f"Malformed attributes for {identifier}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ConfigError(NotetreeError):
    """Raised when a configuration file is invalid."""

    pass


class UnreadableNote(NotetreeError):
    """Raised when a note file exists but cannot be read as UTF-8 text."""

    def __init__(self, identifier: str, path: str, reason: str = ""):
        self.identifier = identifier
        self.path = path
        self.reason = reason
        message = f"Cannot read note {identifier} ({path})"
        if reason:
            message += f": {reason}"
        super().__init__(message)
