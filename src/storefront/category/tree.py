"""Downward-only category tree construction.

The builder never sees parent pointers: it is handed a ``ChildrenIndex``
(node names plus a parent -> children adjacency) derived once from the stored
parent references. Walking that index from any node can only reach
descendants, and a visited set stops the walk even if the stored pointers
happen to form a cycle.
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.cache import get_cache
from storefront.cache.keys import category_tree_key
from storefront.category.category import Category


@dataclass
class CategoryNode:
    id: str
    name: str
    children: list["CategoryNode"] = field(default_factory=list)

    def to_dict(self) -> dict:
        # Iterative so that very deep hierarchies do not hit the recursion limit
        root = {"id": self.id, "name": self.name, "children": []}
        stack = [(self, root)]
        while stack:
            node, out = stack.pop()
            for child in node.children:
                child_out = {"id": child.id, "name": child.name, "children": []}
                out["children"].append(child_out)
                stack.append((child, child_out))
        return root


class ChildrenIndex:
    """Read-only, downward view of the category graph."""

    def __init__(self, names: dict[str, str], children: dict[str, list[str]]) -> None:
        self._names = names
        self._children = children

    @classmethod
    def from_parent_pointers(cls, rows: Iterable[tuple[str, str, str | None]]) -> "ChildrenIndex":
        """Build the index from ``(id, name, parent_id)`` rows.

        Children are listed in name order. A parent id that does not resolve
        to a known category is ignored.
        """
        rows = list(rows)
        names = {str(category_id): name for category_id, name, _ in rows}
        children: dict[str, list[str]] = defaultdict(list)
        for category_id, _, parent_id in sorted(rows, key=lambda row: (row[1], str(row[0]))):
            if parent_id and str(parent_id) in names:
                children[str(parent_id)].append(str(category_id))
        return cls(names, dict(children))

    def __contains__(self, category_id) -> bool:
        return str(category_id) in self._names

    def name_of(self, category_id) -> str:
        return self._names[str(category_id)]

    def children_of(self, category_id) -> list[str]:
        return list(self._children.get(str(category_id), []))


def build_tree(category_id, index: ChildrenIndex) -> CategoryNode:
    """Return the subtree rooted at ``category_id``: the node and its descendants only."""
    if category_id not in index:
        raise ObjectNotFoundError(f"Category #{category_id} not found")

    root_id = str(category_id)
    root = CategoryNode(id=root_id, name=index.name_of(root_id))
    visited = {root_id}
    stack = [root]
    while stack:
        node = stack.pop()
        for child_id in index.children_of(node.id):
            if child_id in visited:
                continue
            visited.add(child_id)
            child = CategoryNode(id=child_id, name=index.name_of(child_id))
            node.children.append(child)
            stack.append(child)
    return root


def load_children_index() -> ChildrenIndex:
    categories = current_domain.repository_for(Category).query.limit(None).all().items
    return ChildrenIndex.from_parent_pointers(
        (str(category.id), category.name, category.parent_id) for category in categories
    )


def category_tree(category_id, cache=None) -> dict:
    """Cached ``{id, name, children: [...]}`` view of a category's subtree."""
    if cache is None:
        cache = get_cache()
    return cache.get_or_load(
        category_tree_key(category_id),
        lambda: build_tree(category_id, load_children_index()).to_dict(),
    )
