"""
Tests for the Tree Analyzer.

Tests verify that the analyzer correctly:
    - Inventories marked nodes and cultures
    - Detects orphans and parent-link cycles
    - Finds existing name collisions across skipped levels
"""

from skipper.analyzer import NameCollision, analyze_tree
from skipper.config import SkipperConfig
from skipper.examples import HOME_ID, YEAR_2023_ID, build_example_config, build_example_site
from skipper.model import PublishedNode
from skipper.tree import InMemoryContentTree


def test_example_site_is_clean():
    report = analyze_tree(build_example_site(), build_example_config())

    assert report.total_nodes == 9
    assert report.cultures == ["en", "fr"]
    assert report.marked_nodes == [3, 4, 8]
    assert not report.orphans
    assert not report.has_cycles
    assert report.collisions == []
    assert report.warnings == []


def test_collision_across_year_folders():
    tree = build_example_site()
    tree.add(PublishedNode(id=10, parent_id=YEAR_2023_ID, name="Roadmap", content_type_alias="newsItem",
                           culture_names={"en": "ROADMAP"}))

    report = analyze_tree(tree, build_example_config())

    assert report.collisions == [
        NameCollision(culture="en", name="roadmap", url_parent_id=HOME_ID, node_ids=(7, 10)),
    ]
    assert any("roadmap" in w for w in report.warnings)


def test_invariant_tree_collisions():
    config = SkipperConfig(aliases=frozenset(["folder"]))
    tree = InMemoryContentTree([
        PublishedNode(id=1, name="Home"),
        PublishedNode(id=2, parent_id=1, name="Folder", content_type_alias="folder"),
        PublishedNode(id=3, parent_id=2, name="Page"),
        PublishedNode(id=4, parent_id=1, name="Page "),
    ])

    report = analyze_tree(tree, config)

    assert report.cultures == []
    assert [c.node_ids for c in report.collisions] == [(3, 4)]
    assert report.collisions[0].culture is None


def test_orphans_reported():
    tree = InMemoryContentTree([
        PublishedNode(id=1, name="Home"),
        PublishedNode(id=2, parent_id=42, name="Lost"),
    ])

    report = analyze_tree(tree, SkipperConfig())

    assert report.orphans == {2}
    assert "Orphaned nodes: 2" in report.warnings


def test_parent_cycle_detected():
    tree = InMemoryContentTree([
        PublishedNode(id=1, parent_id=2, name="A"),
        PublishedNode(id=2, parent_id=1, name="B"),
    ])

    report = analyze_tree(tree, SkipperConfig(while_loop_max_count=5))

    assert report.has_cycles
    assert report.cycle_example == [1, 2, 1]
    assert "Cycle in parent links: 1 -> 2 -> 1" in report.warnings
