"""
Collision resolution for nodes about to be saved.

When a node sits under a marked node, its name shares a naming space with
the children of other marked nodes in the same scope. Before the node is
persisted, we look for same-named peers in that scope, for each language
variant, and append a " (n) " suffix to the saved name when one exists.

Pipeline per node and culture:
    1. Gate: skip unchanged persisted nodes and persisted root nodes
    2. Scope: walk up from the parent through marked nodes (bounded)
    3. Candidates: siblings of the scope root and their marked descendants
    4. Tally: count exact and suffixed duplicates, track the largest suffix
    5. Rename: append " (max + 1) " when duplicates were found

IMPORTANT: This module only mutates ContentNode names. The published
tree is read-only here.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Set, Tuple

from skipper.config import SkipperConfig
from skipper.markers import is_marked, nearest_marked_ancestor
from skipper.model import ContentNode, PublishedNode, ROOT_ID
from skipper.tree import ContentNotFoundError, ContentTree

logger = logging.getLogger(__name__)

# The trailing space keeps the host from treating the result as a duplicate
# and appending its own " (1)".
SUFFIX_TEMPLATE = " ({}) "


class HostContextUnavailableError(RuntimeError):
    """Raised when no content tree is available for the current save."""
    pass


def normalize_name(name: str) -> str:
    """Names compare lower-cased with trailing whitespace removed."""
    return (name or "").lower().rstrip()


def duplicate_suffix(saved_name: str, candidate_name: str) -> Optional[int]:
    """
    Return n when candidate_name is saved_name followed by " (n)".

    Both names are expected to be normalized already.

    Examples:
        duplicate_suffix("page", "page (3)")   -> 3
        duplicate_suffix("page", "page (x)")   -> None
        duplicate_suffix("page", "pages (3)")  -> None
    """
    match = re.fullmatch(re.escape(saved_name) + r" \(([0-9]+)\)", candidate_name)
    if match is None:
        return None
    return int(match.group(1))


@dataclass(frozen=True)
class CollisionTally:
    """Running totals of a collision check. Scoring returns a new tally."""

    duplicates: int = 0
    max_suffix: int = 0

    def score(self, saved_name: str, candidate_name: str) -> "CollisionTally":
        if saved_name == candidate_name:
            return CollisionTally(self.duplicates + 1, self.max_suffix)

        suffix = duplicate_suffix(saved_name, candidate_name)
        if suffix is None:
            return self
        return CollisionTally(self.duplicates + 1, max(self.max_suffix, suffix))

    @property
    def has_collision(self) -> bool:
        return self.duplicates > 0

    @property
    def next_suffix(self) -> int:
        return self.max_suffix + 1


@dataclass(frozen=True)
class ScopeResult:
    """Outcome of scope discovery for one culture: a root, or why there is none."""

    root: Optional[PublishedNode] = None
    skip_reason: Optional[str] = None
    steps: int = 0

    @property
    def ok(self) -> bool:
        return self.root is not None


@dataclass(frozen=True)
class Rename:
    node_id: int
    culture: Optional[str]
    old_name: str
    new_name: str


@dataclass
class SavingNotification:
    """The set of nodes the host is about to save."""

    saved_entities: List[ContentNode] = field(default_factory=list)


def resolve_scope_root(
    tree: ContentTree,
    node: ContentNode,
    culture: Optional[str],
    config: SkipperConfig,
) -> ScopeResult:
    """
    Find the node under which collisions of `node` are checked.

    Starts at the parent of `node` and, while the current candidate is
    marked and has a non-root parent, jumps to the nearest marked ancestor
    of that parent. The walk stops after config.while_loop_max_count jumps.
    """
    try:
        base = tree.require(node.parent_id)

        steps = 0
        while is_marked(base, config):
            parent = tree.parent(base)
            if parent is None or parent.id == ROOT_ID:
                break

            _, base = nearest_marked_ancestor(tree, parent, config, culture, recursive=True)
            steps += 1
            logger.debug("Scope of node %s moved to %s (%s)", node.id, base.id, culture)

            if steps >= config.while_loop_max_count:
                logger.warning(
                    "Scope walk for node %s stopped at %s after %d steps",
                    node.id, base.id, steps,
                )
                break
    except ContentNotFoundError as e:
        return ScopeResult(skip_reason=str(e))

    return ScopeResult(root=base, steps=steps)


def iter_candidates(
    tree: ContentTree,
    root: PublishedNode,
    node: ContentNode,
    culture: Optional[str],
    config: SkipperConfig,
) -> Iterator[PublishedNode]:
    """
    Yield every published node whose name may collide with `node`.

    Siblings of the scope root count when the root is marked, marked
    children of those siblings always count. Descent continues below a
    candidate only when the candidate is marked. The saved node and
    everything below it are never yielded, and each node is yielded once.
    """
    visited: Set[int] = set()
    root_marked = is_marked(root, config)

    def descend(start: PublishedNode) -> Iterator[PublishedNode]:
        stack = [start]
        while stack:
            candidate = stack.pop()
            if candidate.id == node.id or candidate.id in visited:
                continue
            visited.add(candidate.id)
            yield candidate
            if is_marked(candidate, config):
                stack.extend(reversed(tree.children(candidate, culture)))

    for sibling in tree.siblings_and_self(root, culture):
        if root_marked:
            yield from descend(sibling)
        for child in tree.children(sibling, culture):
            if is_marked(child, config):
                yield from descend(child)


def count_collisions(
    tree: ContentTree,
    root: PublishedNode,
    node: ContentNode,
    culture: Optional[str],
    config: SkipperConfig,
) -> CollisionTally:
    tally = CollisionTally()

    # Only culture names that actually changed are checked
    if culture is not None and not node.is_name_dirty(culture):
        return tally

    saved_name = normalize_name(node.get_culture_name(culture))
    for candidate in iter_candidates(tree, root, node, culture, config):
        tally = tally.score(saved_name, normalize_name(candidate.name_for(culture)))
    return tally


def _cultures_to_check(node: ContentNode) -> Tuple[List[Optional[str]], bool]:
    """Return (cultures, name_changed) for the node being saved."""
    if node.is_invariant:
        return [None], node.name_dirty
    cultures = list(node.cultures)
    return cultures, len(cultures) > 0


def resolve_node(tree: ContentTree, node: ContentNode, config: SkipperConfig) -> List[Rename]:
    """
    Check one node for name collisions and rename it in place.

    Returns:
        The renames applied, one per culture at most
    """
    cultures, name_changed = _cultures_to_check(node)
    if node.has_identity and not name_changed:
        return []

    renames: List[Rename] = []
    for culture in cultures:
        if node.is_root:
            continue

        scope = resolve_scope_root(tree, node, culture, config)
        if not scope.ok:
            logger.warning("Skipping collision check of node %s (%s): %s", node.id, culture, scope.skip_reason)
            continue

        tally = count_collisions(tree, scope.root, node, culture, config)
        if not tally.has_collision:
            continue

        old_name = node.get_culture_name(culture)
        new_name = old_name + SUFFIX_TEMPLATE.format(tally.next_suffix)
        node.set_culture_name(new_name, culture)
        renames.append(Rename(node_id=node.id, culture=culture, old_name=old_name, new_name=new_name))
        logger.info(
            "Renamed node %s (%s) from %r to %r, %d duplicate(s) under %s",
            node.id, culture, old_name, new_name, tally.duplicates, scope.root.id,
        )

    return renames


class SavingHandler:
    """
    Pre-save hook.

    The host calls handle() with the nodes about to be saved. Names are
    changed in place before the save commits.

    Args:
        context_accessor: Returns the content tree of the current request,
            or None when there is no request context
        config: Skipper configuration
    """

    def __init__(self, context_accessor: Callable[[], Optional[ContentTree]], config: SkipperConfig):
        self._context_accessor = context_accessor
        self._config = config

    def handle(self, notification: SavingNotification) -> List[Rename]:
        tree = self._context_accessor()
        if tree is None:
            raise HostContextUnavailableError("No content tree available for the current save")

        renames: List[Rename] = []
        for node in notification.saved_entities:
            renames.extend(resolve_node(tree, node, self._config))
        return renames
