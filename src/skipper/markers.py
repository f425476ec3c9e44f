"""
Marker resolution.

A node is "marked" when its content type alias is one of the configured
aliases, or when its reserved property is set to true. Marked nodes scope
collision checking: their children share a naming space with the
children of the nearest unmarked ancestor.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

from skipper.config import SkipperConfig
from skipper.model import PublishedNode, ROOT_ID
from skipper.tree import ContentTree

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"1", "true", "yes"}


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return value is True or value == 1


def is_marked(node: PublishedNode, config: SkipperConfig) -> bool:
    if (node.content_type_alias or "").lower() in config.aliases:
        return True
    return _as_bool(node.properties.get(config.reserved_property_alias, False))


def nearest_marked_ancestor(
    tree: ContentTree,
    node: PublishedNode,
    config: SkipperConfig,
    culture: Optional[str] = None,
    recursive: bool = False,
) -> Tuple[bool, PublishedNode]:
    """
    Find the nearest marked node among node and its ancestors.

    Args:
        tree: Content tree used to resolve parents
        node: Starting node, tested first
        config: Marked aliases and the iteration limit
        culture: Accepted for call-site symmetry, marking is culture-agnostic
        recursive: Accepted for call-site symmetry

    Returns:
        (True, marked node) when found, otherwise (False, last node visited)
    """
    if is_marked(node, config):
        return True, node

    current = node
    for _ in range(config.while_loop_max_count):
        parent = tree.parent(current)
        if parent is None or parent.id == ROOT_ID:
            return False, current
        current = parent
        if is_marked(current, config):
            return True, current

    logger.warning(
        "Stopped looking for a marked ancestor of node %s after %d steps",
        node.id, config.while_loop_max_count,
    )
    return False, current
