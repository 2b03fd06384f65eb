"""Markdown item cards with YAML frontmatter."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

import frontmatter

from itemrebirth.registry.store import Item

if TYPE_CHECKING:
    from itemrebirth.registry.store import ItemStore

logger = logging.getLogger(__name__)


def slugify(name: str) -> str:
    """Minimal slug: strip illegal chars, spaces to hyphens, keep CJK."""
    slug = re.sub(r'[<>:"/\\|?*\n\r\t]', "", name)
    slug = slug.strip().replace(" ", "-")
    return slug or "unnamed"


def render_card(item: Item) -> str:
    post = frontmatter.Post(
        f"# {item.name}\n\n{item.description}\n",
        name=item.name,
        description=item.description,
        contact=item.contact_info,
    )
    return frontmatter.dumps(post) + "\n"


def read_card(path: Path) -> Item:
    """Load an item back from a card file."""
    post = frontmatter.load(str(path))
    meta = post.metadata
    return Item(
        name=str(meta.get("name", path.stem)),
        description=str(meta.get("description", "")),
        contact_info=str(meta.get("contact", "")),
    )


def export_cards(store: ItemStore, directory: Path) -> list[Path]:
    """Write one card per item into ``directory``. Returns the written paths."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    used: set[str] = set()
    for item in store.list():
        slug = slugify(item.name)
        stem = slug
        counter = 2
        while stem in used:
            stem = f"{slug}-{counter}"
            counter += 1
        used.add(stem)

        path = directory / f"{stem}.md"
        path.write_text(render_card(item), encoding="utf-8")
        written.append(path)

    logger.info("Exported %d card(s) to %s", len(written), directory)
    return written
