#!/usr/bin/env python3
"""
Saving Demo: Tree → Diagnostics → Save hook → Snapshot

Shows the full workflow:
1. Load a tree snapshot (YAML) or build the example site
2. Analyze the tree
3. Save new nodes through the pre-save hook
4. Export the tree snapshot

Usage:
    python demo_saving.py [tree.yaml] [config.yaml]
"""

import logging
import sys

from skipper.analyzer import analyze_tree
from skipper.collisions import SavingHandler, SavingNotification
from skipper.config import load_config
from skipper.examples import (
    YEAR_2023_ID,
    YEAR_2024_ID,
    build_example_config,
    build_example_site,
    build_new_news_item,
)
from skipper.serialization import tree_from_yaml, tree_to_yaml


def main(argv):
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 80)
    print("SAVING DEMO: Tree → Diagnostics → Save hook")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Load tree and configuration
    # =========================================================================
    print("\n1. LOADING TREE...")
    if len(argv) > 1:
        with open(argv[1], encoding="utf-8") as fh:
            tree = tree_from_yaml(fh.read())
    else:
        tree = build_example_site()
    config = load_config(argv[2]) if len(argv) > 2 else build_example_config()
    print(f"   ✓ Nodes: {len(tree)}")
    print(f"   ✓ Marked aliases: {sorted(config.aliases)}")

    # =========================================================================
    # STEP 2: Analyze tree
    # =========================================================================
    print("\n2. ANALYZING TREE...")
    report = analyze_tree(tree, config)
    print(f"   ✓ Cultures: {report.cultures}")
    print(f"   ✓ Marked nodes: {report.marked_nodes}")
    print(f"   ✓ Cycles detected: {report.has_cycles}")
    for warning in report.warnings:
        print(f"      - {warning}")

    # =========================================================================
    # STEP 3: Save nodes
    # =========================================================================
    print("\n3. SAVING NODES...")
    handler = SavingHandler(lambda: tree, config)
    notification = SavingNotification(saved_entities=[
        build_new_news_item(YEAR_2024_ID, "Launch", "Lancement"),
        build_new_news_item(YEAR_2023_ID, "Roadmap", "Calendrier"),
        build_new_news_item(YEAR_2023_ID, "Hiring", "Recrutement"),
    ])
    renames = handler.handle(notification)
    for node in notification.saved_entities:
        names = ", ".join(f"{c}={info.name!r}" for c, info in node.cultures.items())
        print(f"   ✓ {names}")
    print(f"   ✓ Renames applied: {len(renames)}")

    # =========================================================================
    # STEP 4: Snapshot
    # =========================================================================
    print("\n4. TREE SNAPSHOT (first lines):")
    print("-" * 80)
    lines = tree_to_yaml(tree).splitlines()
    for line in lines[:12]:
        print(f"   {line}")
    if len(lines) > 12:
        print(f"   ... ({len(lines) - 12} more lines)")

    print("\n" + "=" * 80)


if __name__ == "__main__":
    main(sys.argv)
