"""
Example site tree for demos and tests.

Builds a small bilingual site where news items live in per-year folders
that are skipped in URLs (type alias "newsYear"), so every item is
published as /<item-name>:

    Home (1)
    ├── About (2)
    ├── 2023 (3, newsYear)
    │   └── Launch (5)
    ├── 2024 (4, newsYear)
    │   ├── Launch (1) (6)
    │   └── Roadmap (7)
    └── Archive (8, skipperWasHere=true)
        └── Contact (9)
"""
from skipper.config import SkipperConfig
from skipper.model import ContentNode, CultureInfo, PublishedNode
from skipper.tree import InMemoryContentTree


EXAMPLE_ALIASES = ("newsYear",)

HOME_ID = 1
YEAR_2023_ID = 3
YEAR_2024_ID = 4
ARCHIVE_ID = 8


def build_example_config(while_loop_max_count: int = 100) -> SkipperConfig:
    return SkipperConfig(aliases=frozenset(EXAMPLE_ALIASES), while_loop_max_count=while_loop_max_count)


def build_example_site() -> InMemoryContentTree:
    tree = InMemoryContentTree()

    tree.add(PublishedNode(id=HOME_ID, name="Home", content_type_alias="home", level=1,
                           culture_names={"en": "Home", "fr": "Accueil"}))
    tree.add(PublishedNode(id=2, parent_id=HOME_ID, name="About", content_type_alias="page", level=2,
                           culture_names={"en": "About", "fr": "A propos"}))

    for node_id, year in ((YEAR_2023_ID, "2023"), (YEAR_2024_ID, "2024")):
        tree.add(PublishedNode(id=node_id, parent_id=HOME_ID, name=year, content_type_alias="newsYear",
                               level=2, culture_names={"en": year, "fr": year}))

    tree.add(PublishedNode(id=5, parent_id=YEAR_2023_ID, name="Launch", content_type_alias="newsItem", level=3,
                           culture_names={"en": "Launch", "fr": "Lancement"}))
    tree.add(PublishedNode(id=6, parent_id=YEAR_2024_ID, name="Launch (1)", content_type_alias="newsItem", level=3,
                           culture_names={"en": "Launch (1)", "fr": "Lancement (1)"}))
    tree.add(PublishedNode(id=7, parent_id=YEAR_2024_ID, name="Roadmap", content_type_alias="newsItem", level=3,
                           culture_names={"en": "Roadmap", "fr": "Feuille de route"}))

    tree.add(PublishedNode(id=ARCHIVE_ID, parent_id=HOME_ID, name="Archive", content_type_alias="folder", level=2,
                           culture_names={"en": "Archive", "fr": "Archives"},
                           properties={"skipperWasHere": True}))
    tree.add(PublishedNode(id=9, parent_id=ARCHIVE_ID, name="Contact", content_type_alias="page", level=3,
                           culture_names={"en": "Contact", "fr": "Contact"}))

    return tree


def build_new_news_item(year_id: int, en_name: str, fr_name: str) -> ContentNode:
    """A never-saved news item under a year folder, both cultures edited."""
    return ContentNode(
        parent_id=year_id,
        level=3,
        cultures={
            "en": CultureInfo(culture="en", name=en_name, name_dirty=True),
            "fr": CultureInfo(culture="fr", name=fr_name, name_dirty=True),
        },
    )
