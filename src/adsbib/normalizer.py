"""Turn raw search responses into a numbered ResultSet.

Two upstream shapes are supported:

* ``StructuredResult`` - docs from the JSON API, mapped field by field.
* ``LegacyTableResult`` - the classic abstract service HTML listing.  One
  result spans two adjacent ``<tr>`` rows: the first starts with a numeric
  label and carries the link, score and date cells, the second carries the
  authors and title.  Rows are paired and their cells read by position.
"""

from __future__ import annotations

import logging
import re
from typing import NamedTuple, Optional

from bs4 import BeautifulSoup

from adsbib.exceptions import MalformedUpstreamError
from adsbib.models import Entry, LegacyTableResult, RawResult, ResultSet, StructuredResult

logger = logging.getLogger(__name__)


class LegacyCellOffsets(NamedTuple):
    """Cell positions in the concatenated cells of one legacy row pair.

    The classic listing carries no semantic labels, so these positions are
    the whole contract.  With the default layout the first row contributes
    [label, link, score, date, access-links] and the second row
    [spacer, authors, title].
    """

    link: int = 1
    score: int = 2
    date: int = 3
    authors: int = 6
    title: int = 7


DEFAULT_OFFSETS = LegacyCellOffsets()

_LEADING_NUMBER = re.compile(r"^\s*\d+")
_YEAR = re.compile(r"\d{4}")


# --- Structured path ---


def _year_of(doc: dict) -> str:
    year = doc.get("year")
    if year:
        return str(year)[:4]
    return str(doc.get("date") or "")[:4]


def _score_of(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _normalize_structured(docs: list[dict]) -> list[Entry]:
    entries = []
    for i, doc in enumerate(docs, 1):
        title_list = doc.get("title") or []
        entries.append(
            Entry(
                index=i,
                identifier=doc.get("bibcode", ""),
                score=_score_of(doc.get("score")),
                date=_year_of(doc),
                authors=tuple(doc.get("author") or ()),
                title=title_list[0] if title_list else "",
            )
        )
    return entries


# --- Legacy table path ---


def _cell_text(cells: list, i: int) -> str:
    if i >= len(cells):
        return ""
    return " ".join(cells[i].get_text(" ", strip=True).split())


def _is_numbered(cells: list) -> bool:
    return bool(cells) and bool(_LEADING_NUMBER.match(cells[0].get_text()))


def _pair_to_fields(cells: list, offsets: LegacyCellOffsets) -> dict:
    """Extract entry fields from one concatenated row pair."""
    if offsets.link >= len(cells):
        raise MalformedUpstreamError("Row pair has no link cell")
    anchor = cells[offsets.link].find("a", href=True)
    if anchor is None:
        raise MalformedUpstreamError("Link cell has no anchor")
    identifier = anchor.get_text(strip=True).replace("&amp;", "&")
    if not identifier:
        raise MalformedUpstreamError("Link anchor has no text")

    year = _YEAR.search(_cell_text(cells, offsets.date))
    authors = [a.strip() for a in _cell_text(cells, offsets.authors).split(";")]
    return {
        "identifier": identifier,
        "score": _score_of(_cell_text(cells, offsets.score)),
        "date": year.group(0) if year else "",
        "authors": tuple(a for a in authors if a),
        "title": _cell_text(cells, offsets.title),
    }


def _normalize_legacy(markup: str, offsets: LegacyCellOffsets) -> list[Entry]:
    soup = BeautifulSoup(markup, "html.parser")

    entries: list[Entry] = []
    pending: Optional[list] = None
    for row in soup.find_all("tr"):
        cells = row.find_all(["td", "th"], recursive=False)
        if _is_numbered(cells):
            if pending is not None:
                logger.debug("Dropping legacy row without a second half")
            pending = cells
            continue
        if pending is None:
            continue

        combined = pending + cells
        pending = None
        try:
            fields = _pair_to_fields(combined, offsets)
        except MalformedUpstreamError as e:
            logger.debug("Dropping legacy row pair: %s", e)
            continue
        entries.append(Entry(index=len(entries) + 1, **fields))

    return entries


# --- Entry point ---


def normalize(
    raw: RawResult,
    query: Optional[str] = None,
    *,
    offsets: LegacyCellOffsets = DEFAULT_OFFSETS,
) -> ResultSet:
    """Build a ResultSet from either raw upstream shape."""
    if isinstance(raw, StructuredResult):
        entries = _normalize_structured(raw.docs)
    elif isinstance(raw, LegacyTableResult):
        entries = _normalize_legacy(raw.markup, offsets)
    else:
        raise TypeError(f"Unsupported raw result type: {type(raw).__name__}")
    return ResultSet(entries=tuple(entries), query=query)
