"""Note store and parsing utilities."""

from .parser import extract_links, parse_filename
from .store import DirectoryNoteStore, NoteStore

__all__ = [
    "extract_links",
    "parse_filename",
    "DirectoryNoteStore",
    "NoteStore",
]
