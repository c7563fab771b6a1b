"""Movement over an indexed RenderedTree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ..models import RenderedTree


@dataclass
class SiblingCursor:
    """Index within a ring of `count` siblings."""

    count: int = 1
    index: int = 0

    def advance(self, n: int) -> int:
        self.index = (self.index + n) % max(self.count, 1)
        return self.index


class Navigator:
    """
    Navigation state over an indexed tree.

    Holds the current position, the stack of ancestor positions (root at the
    bottom) and a sibling cursor per depth. Every move reads the navigation
    records only; a move that is not possible leaves the state unchanged and
    returns the current position.
    """

    def __init__(self, tree: RenderedTree, on_move: Callable[[int], None] | None = None):
        self.tree = tree
        self.on_move = on_move
        self.reset()

    def reset(self) -> int:
        self.current = self.tree.root
        self.stack: list[tuple[int, SiblingCursor]] = []
        self.cursor = SiblingCursor()
        self._moved()
        return self.current

    @property
    def depth(self) -> int:
        return len(self.stack)

    @property
    def identifier(self) -> str:
        return self.tree.identifier_at(self.current)

    def _moved(self) -> None:
        if self.on_move is not None:
            self.on_move(self.current)

    def enter_child(self) -> int:
        nav = self.tree[self.current].nav
        if nav.child is None:
            return self.current
        self.stack.append((self.current, self.cursor))
        self.current = nav.child
        child_nav = self.tree[self.current].nav
        self.cursor = SiblingCursor(child_nav.count, child_nav.index)
        self._moved()
        return self.current

    def exit_to_parent(self) -> int:
        if not self.stack:
            return self.current
        self.current, self.cursor = self.stack.pop()
        self._moved()
        return self.current

    def next_sibling(self, n: int = 1) -> int:
        """Move `n` siblings forward, wrapping; negative `n` moves backward."""
        if not self.stack:
            return self.current
        steps = abs(n) % max(self.cursor.count, 1)
        if steps == 0:
            return self.current
        self.cursor.advance(n)
        for _ in range(steps):
            nav = self.tree[self.current].nav
            self.current = nav.next if n > 0 else nav.prev
        self._moved()
        return self.current

    def prev_sibling(self, n: int = 1) -> int:
        return self.next_sibling(-n)

    def goto(self, position: int) -> int:
        """Jump to any rendered position, rebuilding the ancestor stack."""
        if not 0 <= position < len(self.tree):
            return self.current
        chain: list[int] = []
        parent = self.tree[position].nav.parent
        while parent is not None:
            chain.append(parent)
            parent = self.tree[parent].nav.parent
        self.stack = []
        for ancestor in reversed(chain):
            nav = self.tree[ancestor].nav
            self.stack.append((ancestor, SiblingCursor(nav.count, nav.index)))
        nav = self.tree[position].nav
        self.current = position
        self.cursor = SiblingCursor(nav.count, nav.index)
        self._moved()
        return self.current
