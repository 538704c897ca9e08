"""Fixed-width text listing of a ResultSet.

Each entry renders as a block::

    [  1].  2008ApJ...681..626Q                                        (28.17)
            2008  Quataert, E.; Foo, B.

    Title wrapped to eighty columns ...

Blocks are separated by two blank lines.  The Listing keeps a line -> Entry
table so a cursor position can be mapped back to its entry.
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass, field
from typing import Optional

from adsbib.models import Entry, ResultSet

WIDTH = 80
INDENT = " " * 8
BLOCK_SEPARATOR = ["", ""]


def _format_score(score: float) -> str:
    return f"({score:g})"


def _head_line(entry: Entry) -> str:
    head = f"[{entry.index:>3}].  {entry.identifier}"
    score = _format_score(entry.score)
    pad = max(WIDTH - len(head) - len(score), 0)
    return head + " " * pad + score


def format_entry(entry: Entry) -> list[str]:
    """Render one entry as a list of lines, without trailing separators."""
    lines = [_head_line(entry)]
    lines.append(f"{INDENT}{entry.date}  {entry.author_string}"[:WIDTH])
    if entry.title:
        lines.append("")
        lines.extend(textwrap.wrap(entry.title, width=WIDTH))
    return lines


@dataclass
class Listing:
    """Rendered lines plus the line -> Entry lookup table."""

    lines: list[str] = field(default_factory=list)
    line_entries: dict[int, Entry] = field(default_factory=dict)
    block_starts: dict[int, int] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def entry_at(self, line_no: int) -> Optional[Entry]:
        """Entry whose block covers ``line_no`` (0-based), if any."""
        return self.line_entries.get(line_no)

    def line_of(self, index: int) -> Optional[int]:
        """First line of the block for the entry with display ``index``."""
        return self.block_starts.get(index)


def render_listing(results: ResultSet) -> Listing:
    listing = Listing()
    for n, entry in enumerate(results):
        if n:
            listing.lines.extend(BLOCK_SEPARATOR)
        start = len(listing.lines)
        listing.block_starts[entry.index] = start
        for line in format_entry(entry):
            listing.line_entries[len(listing.lines)] = entry
            listing.lines.append(line)
    return listing
