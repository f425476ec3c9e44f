"""
Content tree access.

ContentTree is the interface the resolvers need from the host content
store. InMemoryContentTree is a dictionary-backed implementation used by
the demo, the diagnostics and the tests.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from skipper.model import PublishedNode, ROOT_ID


class ContentNotFoundError(LookupError):
    """Raised when a node id does not resolve to a node."""
    pass


class ContentTree(ABC):
    """
    Read access to the published content tree.

    Every navigation method is culture-scoped: passing a culture restricts
    the result to nodes available in that culture. None means invariant.
    """

    @abstractmethod
    def get_by_id(self, node_id: int) -> Optional[PublishedNode]:
        ...

    @abstractmethod
    def children(self, node: PublishedNode, culture: Optional[str] = None) -> List[PublishedNode]:
        ...

    def parent(self, node: PublishedNode) -> Optional[PublishedNode]:
        if node.parent_id == ROOT_ID:
            return None
        return self.get_by_id(node.parent_id)

    def siblings_and_self(self, node: PublishedNode, culture: Optional[str] = None) -> List[PublishedNode]:
        parent = self.parent(node)
        if parent is None:
            return self.roots(culture)
        return self.children(parent, culture)

    @abstractmethod
    def roots(self, culture: Optional[str] = None) -> List[PublishedNode]:
        ...

    def require(self, node_id: int) -> PublishedNode:
        node = self.get_by_id(node_id)
        if node is None:
            raise ContentNotFoundError(f"Content node not found: {node_id}")
        return node


class InMemoryContentTree(ContentTree):
    """Content tree held in a dict keyed by node id, children kept in insertion order."""

    def __init__(self, nodes: Iterable[PublishedNode] = ()) -> None:
        self._nodes: Dict[int, PublishedNode] = {}
        for node in nodes:
            self.add(node)

    def add(self, node: PublishedNode) -> PublishedNode:
        if node.id == ROOT_ID:
            raise ValueError(f"Node id {ROOT_ID} is reserved for the tree root")
        if node.id in self._nodes:
            raise ValueError(f"Duplicate node id: {node.id}")
        self._nodes[node.id] = node
        return node

    @property
    def nodes(self) -> List[PublishedNode]:
        return list(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: int) -> bool:
        return node_id in self._nodes

    def get_by_id(self, node_id: int) -> Optional[PublishedNode]:
        return self._nodes.get(node_id)

    def children(self, node: PublishedNode, culture: Optional[str] = None) -> List[PublishedNode]:
        return [
            n for n in self._nodes.values()
            if n.parent_id == node.id and n.id != node.id and n.is_visible_in(culture)
        ]

    def roots(self, culture: Optional[str] = None) -> List[PublishedNode]:
        return [n for n in self._nodes.values() if n.parent_id == ROOT_ID and n.is_visible_in(culture)]
