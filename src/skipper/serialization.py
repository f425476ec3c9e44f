"""
Serialization helpers for content tree snapshots.

Provides JSON/YAML round-trip of an InMemoryContentTree via an
intermediate dict representation:

    {"nodes": [{"id": 1, "parent_id": 0, "name": "Home", ...}, ...]}

Nodes are written ordered by id so snapshots diff cleanly.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from skipper.model import PublishedNode, ROOT_ID
from skipper.tree import InMemoryContentTree


class TreeFormatError(ValueError):
    """Raised when a snapshot cannot be turned into a tree."""
    pass


def node_to_dict(n: PublishedNode) -> Dict[str, Any]:
    return {
        "id": n.id,
        "parent_id": n.parent_id,
        "name": n.name,
        "content_type_alias": n.content_type_alias,
        "level": n.level,
        "culture_names": dict(n.culture_names),
        "properties": dict(n.properties),
    }


def node_from_dict(d: Dict[str, Any]) -> PublishedNode:
    if not isinstance(d, dict):
        raise TreeFormatError(f"Node entry must be a mapping, got {type(d).__name__}")
    if "id" not in d:
        raise TreeFormatError(f"Node entry without id: {d}")
    return PublishedNode(
        id=int(d["id"]),
        parent_id=int(d.get("parent_id", ROOT_ID)),
        name=d.get("name", ""),
        content_type_alias=d.get("content_type_alias", ""),
        level=int(d.get("level", 0)),
        culture_names=dict(d.get("culture_names") or {}),
        properties=dict(d.get("properties") or {}),
    )


def tree_to_dict(tree: InMemoryContentTree) -> Dict[str, Any]:
    return {"nodes": [node_to_dict(n) for n in sorted(tree.nodes, key=lambda n: n.id)]}


def tree_from_dict(d: Dict[str, Any]) -> InMemoryContentTree:
    if not isinstance(d, dict):
        raise TreeFormatError("Tree snapshot must be a mapping with a 'nodes' list")
    tree = InMemoryContentTree()
    for entry in d.get("nodes") or []:
        try:
            tree.add(node_from_dict(entry))
        except ValueError as e:
            if isinstance(e, TreeFormatError):
                raise
            raise TreeFormatError(str(e)) from e
    return tree


def tree_to_json(tree: InMemoryContentTree) -> str:
    return json.dumps(tree_to_dict(tree), sort_keys=True)


def tree_from_json(s: str) -> InMemoryContentTree:
    d = json.loads(s)
    return tree_from_dict(d)


def tree_to_yaml(tree: InMemoryContentTree) -> str:
    return yaml.safe_dump(tree_to_dict(tree), sort_keys=False, allow_unicode=True)


def tree_from_yaml(s: str) -> InMemoryContentTree:
    d = yaml.safe_load(s)
    return tree_from_dict(d)
