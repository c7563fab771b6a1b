"""Draw a note tree as indented text with connector glyphs."""

from __future__ import annotations

from rich.text import Text

from ..config import TreeConfig
from ..models import Attributes, BrokenLink, CycleStub, ExpandedNode, Marker, RenderedTree, TreeNode

LAST_CONNECTOR = "'-"
MID_CONNECTOR = "+-"
LAST_INDENT = "  "
MID_INDENT = "| "


def describe(attributes: Attributes, order: tuple[str, ...]) -> str:
    """Space-join the present values of `attributes` in `order`."""
    return " ".join(attributes[name] for name in order if attributes.get(name) is not None)


class TreeRenderer:
    """
    Renders a TreeNode into a RenderedTree.

    Each node becomes one line:

        <prefix><connector><marker> <description>

    where the connector is `'-` for the last sibling and `+-` otherwise, and
    children are indented with `"  "` under a last sibling and `"| "` under
    any other, so `|` columns mark ancestors that still have siblings below.

    The returned positions index the marker arena. The marker also keeps the
    glyph's character offset into the text.
    """

    def __init__(self, config: TreeConfig | None = None):
        self.config = config or TreeConfig()

    def render(self, root: TreeNode) -> RenderedTree:
        self._tree = RenderedTree()
        self._parts: list[str] = []
        self._offset = 0
        self._render(root)
        self._tree.text = "".join(self._parts)
        return self._tree

    def _emit(self, text: str) -> None:
        self._parts.append(text)
        self._offset += len(text)

    def _render(self, root: TreeNode) -> None:
        tree = self._tree
        # (node, prefix, is_last, parent position); children pushed in reverse
        # so they pop in link order
        stack: list[tuple[TreeNode, str, bool, int | None]] = [(root, "", True, None)]

        while stack:
            node, prefix, is_last, parent = stack.pop()
            self._emit(prefix + (LAST_CONNECTOR if is_last else MID_CONNECTOR))

            if isinstance(node, ExpandedNode):
                style = "node"
                attributes = node.attributes
                description = describe(attributes, self.config.fields)
            elif isinstance(node, CycleStub):
                style = "cycle"
                attributes = node.attributes
                description = describe(attributes, self.config.fields)
            elif isinstance(node, BrokenLink):
                style = "broken"
                attributes = {}
                description = node.identifier
            else:
                raise TypeError(f"not a tree node: {node!r}")

            position = len(tree.markers)
            tree.markers.append(
                Marker(
                    position=position,
                    offset=self._offset,
                    line=position,
                    identifier=node.identifier,
                    style=style,
                    attributes=attributes,
                )
            )
            self._emit(f"{self.config.marker} {description}\n")

            tree.children[position] = []
            if parent is not None:
                tree.children[parent].append(position)
            if isinstance(node, CycleStub):
                tree.cycles.append((node.identifier, position))
            if not isinstance(node, ExpandedNode):
                continue

            tree.canonical.setdefault(node.identifier, position)

            child_prefix = prefix + (LAST_INDENT if is_last else MID_INDENT)
            last = len(node.children) - 1
            for i in range(last, -1, -1):
                stack.append((node.children[i], child_prefix, i == last, position))


def render_tree(root: TreeNode, config: TreeConfig | None = None) -> RenderedTree:
    return TreeRenderer(config).render(root)


def to_rich_text(tree: RenderedTree, config: TreeConfig | None = None, highlight: int | None = None) -> Text:
    """Styled copy of the rendered text for a rich console."""
    config = config or TreeConfig()
    text = Text(tree.text)
    for marker in tree.markers:
        text.stylize(config.style_for(marker.style), marker.offset, marker.offset + 1)
    if highlight is not None:
        marker = tree.markers[highlight]
        start = tree.text.rfind("\n", 0, marker.offset) + 1
        end = tree.text.find("\n", marker.offset)
        text.stylize("reverse", start, end if end != -1 else len(tree.text))
    return text


def tree_to_dict(tree: RenderedTree) -> dict:
    """Flat plain-data form of a rendered tree, for JSON output.

    Nodes are listed in render order; `parent` and `children` refer to
    positions in that list.
    """
    nodes = []
    for marker in tree.markers:
        nodes.append(
            {
                "position": marker.position,
                "identifier": marker.identifier,
                "kind": marker.style,
                "attributes": dict(marker.attributes),
                "parent": marker.nav.parent,
                "children": list(tree.children.get(marker.position, [])),
            }
        )
    return {"root": tree.root, "nodes": nodes}
