"""
Tests for the in-memory content tree.
"""

import pytest

from skipper.model import PublishedNode
from skipper.tree import ContentNotFoundError, InMemoryContentTree


def build_tree() -> InMemoryContentTree:
    return InMemoryContentTree([
        PublishedNode(id=1, name="Home"),
        PublishedNode(id=2, name="Other root", culture_names={"fr": "Autre"}),
        PublishedNode(id=3, parent_id=1, name="A", culture_names={"en": "A", "fr": "A"}),
        PublishedNode(id=4, parent_id=1, name="B", culture_names={"en": "B"}),
        PublishedNode(id=5, parent_id=1, name="C"),
    ])


class TestNavigation:
    """Test culture-scoped navigation."""

    def test_children_in_insertion_order(self):
        tree = build_tree()
        assert [n.id for n in tree.children(tree.get_by_id(1))] == [3, 4, 5]

    def test_children_filtered_by_culture(self):
        tree = build_tree()
        assert [n.id for n in tree.children(tree.get_by_id(1), "fr")] == [3, 5]

    def test_siblings_and_self(self):
        tree = build_tree()
        assert [n.id for n in tree.siblings_and_self(tree.get_by_id(4), "en")] == [3, 4, 5]

    def test_siblings_of_root_are_roots(self):
        tree = build_tree()
        assert [n.id for n in tree.siblings_and_self(tree.get_by_id(1))] == [1, 2]
        assert [n.id for n in tree.siblings_and_self(tree.get_by_id(1), "en")] == [1]

    def test_parent(self):
        tree = build_tree()
        assert tree.parent(tree.get_by_id(3)).id == 1
        assert tree.parent(tree.get_by_id(1)) is None

    def test_self_parented_node_is_not_its_own_child(self):
        tree = InMemoryContentTree([PublishedNode(id=7, parent_id=7)])
        assert tree.children(tree.get_by_id(7)) == []


class TestLookup:
    """Test lookups and insertion rules."""

    def test_get_missing(self):
        assert build_tree().get_by_id(42) is None

    def test_require_missing(self):
        with pytest.raises(ContentNotFoundError):
            build_tree().require(42)

    def test_require_found(self):
        assert build_tree().require(3).name == "A"

    def test_duplicate_id_rejected(self):
        tree = build_tree()
        with pytest.raises(ValueError):
            tree.add(PublishedNode(id=1))

    def test_root_sentinel_id_rejected(self):
        with pytest.raises(ValueError):
            InMemoryContentTree([PublishedNode(id=0)])

    def test_container_protocol(self):
        tree = build_tree()
        assert len(tree) == 5
        assert 3 in tree
        assert 42 not in tree
