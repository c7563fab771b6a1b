"""Data models for note trees and their rendered form."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

Identifier = str

# Ordered field name -> value. Absent fields are None, never "".
Attributes = dict[str, Union[str, None]]

Style = Literal["node", "cycle", "broken"]


@dataclass
class ExpandedNode:
    """A note whose links were followed."""

    identifier: Identifier
    attributes: Attributes
    children: list[TreeNode] = field(default_factory=list)


@dataclass
class CycleStub:
    """A note already materialized elsewhere in the same walk."""

    identifier: Identifier
    attributes: Attributes = field(default_factory=dict)


@dataclass
class BrokenLink:
    """A link whose target the store could not resolve."""

    identifier: Identifier
    path: tuple[Identifier, ...] = ()


TreeNode = Union[ExpandedNode, CycleStub, BrokenLink]


@dataclass
class NavRecord:
    """Parent/child/sibling links attached to one rendered position."""

    parent: int | None = None
    child: int | None = None
    prev: int | None = None
    next: int | None = None
    index: int = 0  # position within the sibling ring
    count: int = 1  # size of the sibling ring


@dataclass
class Marker:
    """The glyph that anchors a rendered node."""

    position: int  # index into RenderedTree.markers
    offset: int  # character offset of the glyph in RenderedTree.text
    line: int
    identifier: Identifier
    style: Style = "node"
    attributes: Attributes = field(default_factory=dict)
    nav: NavRecord = field(default_factory=NavRecord)

    @property
    def is_stub(self) -> bool:
        return self.style != "node"


@dataclass
class RenderedTree:
    """Rendered text plus the per-position structure used for navigation."""

    text: str = ""
    markers: list[Marker] = field(default_factory=list)
    children: dict[int, list[int]] = field(default_factory=dict)
    cycles: list[tuple[Identifier, int]] = field(default_factory=list)
    canonical: dict[Identifier, int] = field(default_factory=dict)

    @property
    def root(self) -> int:
        return 0

    def __getitem__(self, position: int) -> Marker:
        return self.markers[position]

    def __len__(self) -> int:
        return len(self.markers)

    def lines(self) -> list[str]:
        return self.text.splitlines()

    def identifier_at(self, position: int) -> Identifier:
        return self.markers[position].identifier

