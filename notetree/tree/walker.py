"""Depth-first walk from a root note to an in-memory tree."""

from __future__ import annotations

import logging
from typing import Callable, Iterator

from ..errors import NoteNotFound
from ..models import BrokenLink, CycleStub, ExpandedNode, TreeNode
from ..vault.parser import extract_links
from ..vault.store import NoteStore

logger = logging.getLogger(__name__)


class WalkSession:
    """
    One traversal of the note graph.

    A note is expanded the first time its content is fetched; every later
    reference to it, whether a true cycle or a second parent, becomes a
    CycleStub. This bounds the walk to one fetch per identifier.

    Use as a context manager: leaving the block releases the store's cache.
    """

    def __init__(
        self,
        store: NoteStore,
        extract: Callable[[str], list[str]] = extract_links,
        on_missing: str = "error",
    ):
        self.store = store
        self.extract = extract
        self.on_missing = on_missing
        self.visited: set[str] = set()
        self.stub_count = 0
        self._path: list[str] = []

    def __enter__(self) -> "WalkSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.visited.clear()
        self._path.clear()
        self.store.release_all()

    def _content(self, identifier: str) -> str:
        try:
            text = self.store.content(identifier)
        except NoteNotFound:
            raise NoteNotFound(identifier, (*self._path, identifier)) from None
        self.visited.add(identifier)
        return text

    def _open(self, identifier: str) -> tuple[ExpandedNode, Iterator[str]]:
        content = self._content(identifier)
        node = ExpandedNode(identifier, self.store.fetch(identifier))
        return node, iter(self.extract(content))

    def walk(self, identifier: str) -> TreeNode:
        """Walk the graph from `identifier` and return its tree.

        Depth-first and in link order, using an explicit stack so long
        chains of notes do not hit the interpreter's recursion limit.
        """
        root, links = self._open(identifier)
        self._path.append(identifier)
        stack = [(root, links)]

        try:
            while stack:
                node, links = stack[-1]
                target = next(links, None)
                if target is None:
                    stack.pop()
                    self._path.pop()
                    continue

                if target in self.visited:
                    node.children.append(CycleStub(target, self.store.fetch(target)))
                    self.stub_count += 1
                    continue

                try:
                    child, child_links = self._open(target)
                except NoteNotFound as e:
                    if self.on_missing != "stub":
                        raise
                    logger.warning("Broken link %s in %s", target, node.identifier)
                    node.children.append(BrokenLink(target, e.path))
                    continue

                node.children.append(child)
                self._path.append(target)
                stack.append((child, child_links))
        finally:
            self._path.clear()

        return root
