# apps/buckets/domain/hierarchy.py
"""
Hierarchia buckets/celów: maksymalnie jeden poziom zagnieżdżenia.

Rodzic musi być elementem głównym, nie można być własnym rodzicem,
a element, który ma już dzieci, nie może dostać rodzica.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class HierarchyError(ValueError):
    pass


def check_parent(item_id: Optional[int], parent_id: Optional[int],
                 parent_parent_id: Optional[int], has_children: bool) -> None:
    if parent_id is None:
        return
    if item_id is not None and parent_id == item_id:
        raise HierarchyError("An item cannot be its own parent.")
    if parent_parent_id is not None:
        raise HierarchyError("Only top-level items can be parents.")
    if has_children:
        raise HierarchyError("An item with children cannot be nested.")


@dataclass
class TreeNode:
    item: Any
    children: List[Any] = field(default_factory=list)


def build_tree(items, sort_key=None) -> List[TreeNode]:
    """
    Dwupoziomowe drzewo z płaskiej listy (parent_id wskazuje rodzica).
    Dzieci, których rodzica nie ma na liście, trafiają na górę.
    """
    sort_key = sort_key or (lambda i: (getattr(i, 'sort_order', 0), getattr(i, 'name', '')))
    items = sorted(items, key=sort_key)
    ids = {i.id for i in items}

    roots: Dict[int, TreeNode] = {}
    for item in items:
        if item.parent_id is None or item.parent_id not in ids:
            roots[item.id] = TreeNode(item)
    for item in items:
        if item.parent_id in roots:
            roots[item.parent_id].children.append(item)
    return list(roots.values())
