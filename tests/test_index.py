from notetree.config import TreeConfig
from notetree.models import NavRecord


def test_root_is_a_ring_of_one(build) -> None:
    tree = build({"R": []})

    assert tree[0].nav == NavRecord(parent=None, child=None, prev=0, next=0, index=0, count=1)


def test_parent_child_and_sibling_links(build) -> None:
    tree = build({"R": ["A", "B", "C"], "A": [], "B": [], "C": []})

    assert tree[0].nav.child == 1
    assert [tree[p].nav.parent for p in (1, 2, 3)] == [0, 0, 0]
    assert [tree[p].nav.next for p in (1, 2, 3)] == [2, 3, 1]
    assert [tree[p].nav.prev for p in (1, 2, 3)] == [3, 1, 2]
    assert [tree[p].nav.index for p in (1, 2, 3)] == [0, 1, 2]
    assert {tree[p].nav.count for p in (1, 2, 3)} == {3}
    # leaves get no child pointer
    assert all(tree[p].nav.child is None for p in (1, 2, 3))


def test_sibling_ring_closes_after_k_steps(build) -> None:
    tree = build({"R": ["A", "B", "C", "D"], "A": ["E", "F"], "B": [], "C": [], "D": [], "E": [], "F": []})

    for parent, children in tree.children.items():
        if not children:
            continue
        first = tree[parent].nav.child
        position = first
        for _ in range(len(children)):
            position = tree[position].nav.next
        assert position == first
        assert tree[first].nav.prev == children[-1]


def test_parent_of_first_child_is_node(build) -> None:
    tree = build({"R": ["A", "B"], "A": ["C"], "B": ["A"], "C": ["R"]})

    for marker in tree.markers:
        if marker.style == "node" and marker.nav.child is not None:
            assert tree[marker.nav.child].nav.parent == marker.position


def test_stub_descends_into_canonical_children(build) -> None:
    # R -> A -> B -> A: the stub under B points at A's first child (B)
    tree = build({"R": ["A"], "A": ["B"], "B": ["A"]})

    assert tree.lines() == ["'-* R", "  '-* A", "    '-* B", "      '-* A"]
    assert tree.cycles == [("A", 3)]
    assert tree[3].nav.child == tree[1].nav.child == 2


def test_stub_child_is_never_a_stub(build) -> None:
    # A's first child is a stub of A itself; resolution skips to B
    tree = build({"R": ["A"], "A": ["A", "B"], "B": []})

    assert tree[1].nav.child == 2
    assert tree[2].style == "cycle"
    assert tree[2].nav.child == 3
    for _, stub in tree.cycles:
        child = tree[stub].nav.child
        assert child is None or tree[child].style == "node"


def test_self_link_stub_has_no_child(build) -> None:
    tree = build({"R": ["R"]})

    assert tree[0].nav.child == 1
    assert tree[1].nav.parent == 0
    assert tree[1].nav.child is None


def test_stub_of_leaf_has_no_child(build) -> None:
    tree = build({"R": ["A", "B"], "A": [], "B": ["A"]})

    assert tree[3].nav.child is None


def test_broken_links_are_not_resolved(build) -> None:
    tree = build({"R": ["X", "A"], "A": []}, config=TreeConfig(on_missing="stub"))

    assert tree[1].style == "broken"
    assert tree[1].nav.child is None
    assert tree[1].nav.next == 2
