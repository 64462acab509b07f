"""Tests for the downward-only category tree builder."""

import pytest
from protean.exceptions import ObjectNotFoundError
from storefront.category.tree import CategoryNode, ChildrenIndex, build_tree


def _ids(node):
    """All ids in a subtree, depth first."""
    found = [node.id]
    for child in node.children:
        found.extend(_ids(child))
    return found


@pytest.fixture()
def hierarchy():
    # electronics -> phones -> smartphones
    #             -> laptops
    # books
    return ChildrenIndex.from_parent_pointers(
        [
            ("electronics", "Electronics", None),
            ("phones", "Phones", "electronics"),
            ("laptops", "Laptops", "electronics"),
            ("smartphones", "Smartphones", "phones"),
            ("books", "Books", None),
        ]
    )


class TestBuildTree:
    def test_root_contains_all_descendants(self, hierarchy):
        tree = build_tree("electronics", hierarchy)

        assert tree.name == "Electronics"
        assert [child.name for child in tree.children] == ["Laptops", "Phones"]
        assert sorted(_ids(tree)) == ["electronics", "laptops", "phones", "smartphones"]

    def test_middle_node_never_includes_ancestors(self, hierarchy):
        tree = build_tree("phones", hierarchy)
        assert _ids(tree) == ["phones", "smartphones"]

    def test_leaf_has_no_children(self, hierarchy):
        tree = build_tree("smartphones", hierarchy)
        assert tree.to_dict() == {"id": "smartphones", "name": "Smartphones", "children": []}

    def test_unrelated_roots_stay_separate(self, hierarchy):
        assert _ids(build_tree("books", hierarchy)) == ["books"]

    def test_unknown_category(self, hierarchy):
        with pytest.raises(ObjectNotFoundError):
            build_tree("missing", hierarchy)

    def test_dangling_parent_is_ignored(self):
        index = ChildrenIndex.from_parent_pointers([("orphan", "Orphan", "gone")])
        assert _ids(build_tree("orphan", index)) == ["orphan"]


class TestCorruptedGraphs:
    def test_two_node_cycle_terminates(self):
        index = ChildrenIndex.from_parent_pointers([("a", "A", "b"), ("b", "B", "a")])

        tree = build_tree("a", index)

        assert _ids(tree) == ["a", "b"]
        assert tree.children[0].children == []

    def test_self_parent_terminates(self):
        index = ChildrenIndex.from_parent_pointers([("loop", "Loop", "loop")])
        assert _ids(build_tree("loop", index)) == ["loop"]

    def test_bidirectional_object_graph_only_walks_down(self):
        """Objects carrying both parent and children references are reduced to parent pointers first."""

        class Node:
            def __init__(self, id, name, parent=None):
                self.id = id
                self.name = name
                self.parent = parent
                self.children = []
                if parent is not None:
                    parent.children.append(self)

        root = Node("root", "Root")
        middle = Node("middle", "Middle", root)
        leaf = Node("leaf", "Leaf", middle)
        nodes = [root, middle, leaf]

        index = ChildrenIndex.from_parent_pointers(
            (node.id, node.name, node.parent.id if node.parent else None) for node in nodes
        )

        assert _ids(build_tree("leaf", index)) == ["leaf"]
        assert _ids(build_tree("middle", index)) == ["middle", "leaf"]

    def test_very_deep_chain_does_not_hit_recursion_limit(self):
        rows = [("n0", "N0", None)] + [(f"n{i}", f"N{i}", f"n{i - 1}") for i in range(1, 5000)]
        tree = build_tree("n0", ChildrenIndex.from_parent_pointers(rows))

        node, depth = tree, 0
        while node.children:
            node = node.children[0]
            depth += 1
        assert depth == 4999
        assert tree.to_dict()["id"] == "n0"


class TestCategoryNode:
    def test_to_dict_nests_children(self):
        node = CategoryNode(id="a", name="A", children=[CategoryNode(id="b", name="B")])
        assert node.to_dict() == {
            "id": "a",
            "name": "A",
            "children": [{"id": "b", "name": "B", "children": []}],
        }
