"""One tree-building invocation: walk, render, index."""

from __future__ import annotations

import logging
import time
from typing import Callable

from ..config import TreeConfig
from ..models import RenderedTree, TreeNode
from ..vault.parser import extract_links
from ..vault.store import NoteStore
from .index import index_tree
from .render import TreeRenderer
from .walker import WalkSession

logger = logging.getLogger(__name__)


def walk_tree(
    root_id: str,
    store: NoteStore,
    config: TreeConfig | None = None,
    extract: Callable[[str], list[str]] = extract_links,
) -> TreeNode:
    """Walk from `root_id`, releasing the store cache afterwards."""
    config = config or TreeConfig()
    store.release_all()
    with WalkSession(store, extract=extract, on_missing=config.on_missing) as session:
        root = session.walk(root_id)
        logger.debug("Walked %s: %d notes, %d stubs", root_id, len(session.visited), session.stub_count)
    return root


def build_tree(
    root_id: str,
    store: NoteStore,
    config: TreeConfig | None = None,
    extract: Callable[[str], list[str]] = extract_links,
) -> RenderedTree:
    """
    Build the navigable tree rooted at `root_id`.

    Any failure aborts the whole pass; no partial tree is returned. The
    store's cache is released before and after, so each invocation starts
    from a clean state.
    """
    config = config or TreeConfig()
    started = time.perf_counter()

    root = walk_tree(root_id, store, config, extract)
    tree = index_tree(TreeRenderer(config).render(root))

    logger.debug(
        "Built tree for %s: %d lines, %d cycle stubs in %.3fs",
        root_id,
        len(tree),
        len(tree.cycles),
        time.perf_counter() - started,
    )
    return tree
