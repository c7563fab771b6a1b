"""Attach navigation records to rendered positions."""

from __future__ import annotations

from ..models import NavRecord, RenderedTree


def _resolve_stub_child(tree: RenderedTree, canonical: int) -> int | None:
    """First non-stub child of the canonical node, walking its sibling ring."""
    first = tree[canonical].nav.child
    if first is None:
        return None
    position = first
    while tree[position].is_stub:
        position = tree[position].nav.next
        if position == first:
            return None
    return position


def index_tree(tree: RenderedTree) -> RenderedTree:
    """Fill in parent/child/prev/next for every marker of `tree`.

    Siblings form a circular list: the last sibling's `next` is the first
    sibling and the first sibling's `prev` is the last. The root is a ring
    of one.

    Cycle stubs are then given the canonical node's first child, so
    descending from a stub behaves like descending from the canonical node.
    A resolved child is never itself a stub; if the canonical node has no
    non-stub children the stub keeps no child.
    """
    if not tree.markers:
        return tree

    root = tree.root
    tree[root].nav = NavRecord(parent=None, child=None, prev=root, next=root, index=0, count=1)

    for parent, children in tree.children.items():
        if not children:
            continue
        tree[parent].nav.child = children[0]
        count = len(children)
        for i, position in enumerate(children):
            nav = tree[position].nav
            nav.parent = parent
            nav.next = children[(i + 1) % count]
            nav.prev = children[(i - 1) % count]
            nav.index = i
            nav.count = count

    for identifier, stub in tree.cycles:
        canonical = tree.canonical.get(identifier)
        if canonical is None:
            continue
        tree[stub].nav.child = _resolve_stub_child(tree, canonical)

    return tree
