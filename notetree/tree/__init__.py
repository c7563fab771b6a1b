"""Walking, rendering, indexing and navigating note trees."""

from .builder import build_tree, walk_tree
from .index import index_tree
from .navigator import Navigator, SiblingCursor
from .render import TreeRenderer, render_tree, to_rich_text
from .walker import WalkSession

__all__ = [
    "build_tree",
    "walk_tree",
    "index_tree",
    "Navigator",
    "SiblingCursor",
    "TreeRenderer",
    "render_tree",
    "to_rich_text",
    "WalkSession",
]
