"""Record store — ordered item list mirrored to a flat text file.

The text file is the source of truth between runs. It is read once at
startup and rewritten in full after every add/delete. Each record is four
lines: three labeled fields and a ``---`` separator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from itemrebirth.errors import StoreWriteError

logger = logging.getLogger(__name__)

NAME_LABEL = "物品名称: "
DESCRIPTION_LABEL = "物品描述: "
CONTACT_LABEL = "联系人信息: "
RECORD_SEPARATOR = "---"

_FIELD_LABELS = {
    NAME_LABEL: "name",
    DESCRIPTION_LABEL: "description",
    CONTACT_LABEL: "contact_info",
}


@dataclass(frozen=True)
class Item:
    """A single lost-and-found record."""

    name: str
    description: str
    contact_info: str


class ItemStore:
    """In-memory item list, loaded from and flushed to ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._items: list[Item] = []
        self.load()

    def __len__(self) -> int:
        return len(self._items)

    # ── Persistence ───────────────────────────────────────────

    def load(self) -> None:
        """Replace the in-memory list with the file's records.

        A missing or unreadable file is an empty store.
        """
        if not self.path.exists():
            logger.info("No data file at %s, starting empty", self.path)
            self._items = []
            return
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            logger.warning("Cannot read %s, starting empty", self.path, exc_info=True)
            self._items = []
            return
        self._items = parse_records(text)
        logger.info("Loaded %d item(s) from %s", len(self._items), self.path)

    def _save(self) -> None:
        """Rewrite the whole file from the in-memory list."""
        try:
            with self.path.open("w", encoding="utf-8", newline="\n") as f:
                f.write(render_records(self._items))
        except OSError as exc:
            logger.exception("Failed to write %s", self.path)
            raise StoreWriteError(f"无法保存到 {self.path}: {exc}") from exc
        logger.info("Saved %d item(s) to %s", len(self._items), self.path)

    # ── Operations ────────────────────────────────────────────

    def add(self, name: str, description: str, contact_info: str) -> Item:
        """Append a new item and persist. The list is unchanged if the write fails."""
        for value in (name, description, contact_info):
            if "\n" in value or "\r" in value:
                raise ValueError("字段不能包含换行符")
        item = Item(name, description, contact_info)
        self._items.append(item)
        try:
            self._save()
        except StoreWriteError:
            self._items.pop()
            raise
        return item

    def delete(self, name: str) -> Item | None:
        """Remove the first item named ``name``. Returns it, or None if absent."""
        for i, item in enumerate(self._items):
            if item.name == name:
                del self._items[i]
                try:
                    self._save()
                except StoreWriteError:
                    self._items.insert(i, item)
                    raise
                return item
        logger.debug("Delete: no item named %r", name)
        return None

    def list(self) -> Iterator[Item]:
        """Iterate items in insertion order."""
        yield from self._items

    def search(self, name: str) -> Item | None:
        """Return the first item named ``name``, or None."""
        for item in self._items:
            if item.name == name:
                return item
        return None


def render_records(items: list[Item]) -> str:
    """Serialize items into the four-line record format."""
    lines: list[str] = []
    for item in items:
        lines.append(f"{NAME_LABEL}{item.name}")
        lines.append(f"{DESCRIPTION_LABEL}{item.description}")
        lines.append(f"{CONTACT_LABEL}{item.contact_info}")
        lines.append(RECORD_SEPARATOR)
    return "".join(line + "\n" for line in lines)


def parse_records(text: str) -> list[Item]:
    """Parse the record format, keyed on the field labels.

    A name line opens a record; the separator, the next name line or the end
    of the text closes it. Fields missing from a record are empty.
    """
    items: list[Item] = []
    current: dict[str, str] | None = None

    def close() -> None:
        if current is not None:
            items.append(
                Item(
                    name=current.get("name", ""),
                    description=current.get("description", ""),
                    contact_info=current.get("contact_info", ""),
                )
            )

    for lineno, raw in enumerate(text.split("\n"), start=1):
        line = raw.rstrip("\r")
        if not line:
            continue
        if line == RECORD_SEPARATOR:
            close()
            current = None
            continue

        field = _match_label(line)
        if field is None:
            logger.debug("Skipping unlabeled line %d: %r", lineno, line)
            continue
        key, value = field
        if key == "name":
            close()
            current = {"name": value}
        elif current is None:
            logger.debug("Skipping %s outside a record at line %d", key, lineno)
        else:
            current[key] = value

    close()
    return items


def _match_label(line: str) -> tuple[str, str] | None:
    for label, key in _FIELD_LABELS.items():
        if line.startswith(label):
            return key, line[len(label):]
    return None
