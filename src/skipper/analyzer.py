"""
Tree Analyzer — read-only diagnostics for content trees.

This module reports on an InMemoryContentTree:
    - Marked node inventory
    - Orphans (parent id that does not resolve)
    - Cycles in parent links
    - Existing name collisions between nodes that share a URL level

IMPORTANT: It does NOT modify the tree. It only produces read-only reports.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from skipper.collisions import normalize_name
from skipper.config import SkipperConfig
from skipper.markers import is_marked
from skipper.model import PublishedNode, ROOT_ID
from skipper.tree import InMemoryContentTree


@dataclass(frozen=True)
class NameCollision:
    """Nodes sharing a normalized name under the same URL parent."""
    culture: Optional[str]
    name: str
    url_parent_id: int
    node_ids: Tuple[int, ...]


@dataclass
class TreeReport:
    """Analysis report for a content tree."""

    total_nodes: int = 0
    cultures: List[str] = field(default_factory=list)
    marked_nodes: List[int] = field(default_factory=list)
    orphans: Set[int] = field(default_factory=set)
    has_cycles: bool = False
    cycle_example: Optional[List[int]] = None
    collisions: List[NameCollision] = field(default_factory=list)

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def _find_parent_cycle(tree: InMemoryContentTree, start: PublishedNode) -> Optional[List[int]]:
    """Follow parent links from start; return the cycle if one is reached."""
    path: List[int] = []
    seen: Dict[int, int] = {}
    current: Optional[PublishedNode] = start
    while current is not None and current.id not in seen:
        seen[current.id] = len(path)
        path.append(current.id)
        current = tree.parent(current)
    if current is None:
        return None
    return path[seen[current.id]:] + [current.id]


def _url_parent_id(tree: InMemoryContentTree, node: PublishedNode, config: SkipperConfig) -> int:
    """Id of the first unmarked ancestor, the level node's name is published under."""
    parent = tree.parent(node)
    for _ in range(config.while_loop_max_count):
        if parent is None:
            return ROOT_ID
        if not is_marked(parent, config):
            return parent.id
        parent = tree.parent(parent)
    return parent.id if parent is not None else ROOT_ID


def analyze_tree(tree: InMemoryContentTree, config: SkipperConfig) -> TreeReport:
    """
    Perform analysis of a content tree.

    Returns a TreeReport with inventory, structural problems and existing
    collisions, plus warnings for each problem found.
    """
    report = TreeReport(total_nodes=len(tree))
    nodes = sorted(tree.nodes, key=lambda n: n.id)

    cultures: Set[str] = set()
    for node in nodes:
        cultures.update(node.culture_names)
        if is_marked(node, config):
            report.marked_nodes.append(node.id)
        if node.parent_id != ROOT_ID and node.parent_id not in tree:
            report.orphans.add(node.id)
    report.cultures = sorted(cultures)

    # Parent-link cycles
    for node in nodes:
        cycle = _find_parent_cycle(tree, node)
        if cycle:
            report.has_cycles = True
            report.cycle_example = cycle
            break

    # Collisions between unmarked nodes published at the same level
    for culture in report.cultures or [None]:
        groups: Dict[Tuple[int, str], List[int]] = defaultdict(list)
        for node in nodes:
            if not node.is_visible_in(culture) or is_marked(node, config):
                continue
            key = (_url_parent_id(tree, node, config), normalize_name(node.name_for(culture)))
            groups[key].append(node.id)
        for (url_parent_id, name), node_ids in sorted(groups.items()):
            if len(node_ids) > 1:
                report.collisions.append(NameCollision(
                    culture=culture, name=name, url_parent_id=url_parent_id, node_ids=tuple(node_ids),
                ))

    if report.orphans:
        report.add_warning(f"Orphaned nodes: {', '.join(str(i) for i in sorted(report.orphans))}")

    if report.has_cycles:
        report.add_warning(f"Cycle in parent links: {' -> '.join(str(i) for i in report.cycle_example)}")

    for collision in report.collisions:
        where = f" ({collision.culture})" if collision.culture else ""
        report.add_warning(
            f"Name collision{where} '{collision.name}' under {collision.url_parent_id}: "
            f"{', '.join(str(i) for i in collision.node_ids)}"
        )

    return report
