"""Data models for ADS search results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

AUTHOR_SEPARATOR = "; "


@dataclass(frozen=True)
class Entry:
    """A single search result with its stable display index."""

    index: int
    identifier: str
    score: float = 0.0
    date: str = ""
    authors: tuple[str, ...] = ()
    title: str = ""

    def __post_init__(self) -> None:
        if not self.identifier:
            raise ValueError("Entry identifier must not be empty")
        if self.index < 1:
            raise ValueError(f"Entry index must be positive, got {self.index}")

    @property
    def author_string(self) -> str:
        return AUTHOR_SEPARATOR.join(self.authors)


@dataclass(frozen=True)
class ResultSet:
    """The current list of entries and the query that produced it.

    ``query`` is None when the set came from an advanced search.
    """

    entries: tuple[Entry, ...] = ()
    query: Optional[str] = None

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def by_index(self, index: int) -> Optional[Entry]:
        if 1 <= index <= len(self.entries):
            return self.entries[index - 1]
        return None

    def by_identifier(self, identifier: str) -> Optional[Entry]:
        for entry in self.entries:
            if entry.identifier == identifier:
                return entry
        return None


@dataclass
class EntryDetails:
    """Extended metadata for one record."""

    identifier: str
    title: str = ""
    authors: list[str] = field(default_factory=list)
    year: str = ""
    journal: str = ""
    abstract: str = ""
    citation_count: Optional[int] = None


# --- Raw upstream shapes ---


@dataclass
class StructuredResult:
    """Docs from the JSON search API."""

    docs: list[dict] = field(default_factory=list)


@dataclass
class LegacyTableResult:
    """Markup from the classic abstract service listing."""

    markup: str = ""


RawResult = Union[StructuredResult, LegacyTableResult]
