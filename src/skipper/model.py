"""
Core Content Model Objects

Defines the two views of a content node that the resolvers work with:
    - PublishedNode: the read side, as returned by the content tree
    - ContentNode: the write side, the entity about to be saved
    - CultureInfo: one language variant name of a ContentNode

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about how the host stores nodes
        - Carry only what collision checking needs
        - Are mutated only by appending a suffix to a name
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


ROOT_ID = 0


@dataclass
class PublishedNode:
    """
    A node as seen in the published content tree.

    Properties:
        id:
            Unique identifier (never 0, which is the tree root sentinel)

        parent_id:
            Identifier of the parent, ROOT_ID for top-level nodes

        name:
            Primary (invariant) name

        content_type_alias:
            Type identifier, matched case-insensitively against marked aliases

        level:
            Tree depth

        culture_names:
            Culture -> localized name. Empty for invariant nodes.

        properties:
            Arbitrary attribute bag (e.g. the reserved skipper property)
    """

    id: int
    parent_id: int = ROOT_ID
    name: str = ""
    content_type_alias: str = ""
    level: int = 0
    culture_names: Dict[str, str] = field(default_factory=dict)
    properties: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_invariant(self) -> bool:
        return not self.culture_names

    def name_for(self, culture: Optional[str] = None) -> str:
        """Name for a culture, falling back to the primary name."""
        if culture is not None and culture in self.culture_names:
            return self.culture_names[culture]
        return self.name

    def is_visible_in(self, culture: Optional[str]) -> bool:
        """Invariant nodes are visible in every culture."""
        return culture is None or self.is_invariant or culture in self.culture_names


@dataclass
class CultureInfo:
    """
    One language variant of a node being saved.

    name_dirty is True when the name for this culture changed since the
    last save.
    """

    culture: str
    name: str
    name_dirty: bool = False


@dataclass
class ContentNode:
    """
    Represents a node about to be persisted.

    Properties:
        id:
            Identifier, 0 while the node has never been saved

        parent_id:
            Identifier of the parent node

        name:
            Primary name (used when the node is invariant)

        level:
            Tree depth

        has_identity:
            True when the node was persisted before

        name_dirty:
            True when the primary name changed since the last save

        cultures:
            Culture -> CultureInfo. Empty for invariant nodes.
    """

    id: int = 0
    parent_id: int = ROOT_ID
    name: str = ""
    level: int = 0
    has_identity: bool = False
    name_dirty: bool = False
    cultures: Dict[str, CultureInfo] = field(default_factory=dict)

    @property
    def is_invariant(self) -> bool:
        return not self.cultures

    @property
    def is_root(self) -> bool:
        return self.has_identity and self.level == 0 and self.parent_id == ROOT_ID

    def get_culture_name(self, culture: Optional[str]) -> str:
        if culture is None:
            return self.name
        info = self.cultures.get(culture)
        return info.name if info is not None else ""

    def set_culture_name(self, name: str, culture: Optional[str]) -> None:
        if culture is None:
            self.name = name
            self.name_dirty = True
            return
        info = self.cultures.get(culture)
        if info is None:
            self.cultures[culture] = CultureInfo(culture=culture, name=name, name_dirty=True)
        else:
            info.name = name
            info.name_dirty = True

    def is_name_dirty(self, culture: Optional[str] = None) -> bool:
        if culture is None:
            return self.name_dirty
        info = self.cultures.get(culture)
        return info is not None and info.name_dirty
