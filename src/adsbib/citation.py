"""BibTeX records for selected entries, with optional key rewriting."""

from __future__ import annotations

import re
from enum import Enum
from typing import Union

import bibtexparser
from bibtexparser.bparser import BibTexParser

from adsbib import client

# Opening marker up to the first comma: "@ARTICLE{2008ApJ...681..626Q,"
_KEY_PATTERN = re.compile(r"^(\s*@\w+\s*\{)([^,]*),")


class LabelPolicy(str, Enum):
    VERBATIM = "verbatim"
    AUTHOR_YEAR = "author-year"


def parse_policy(value: Union[str, LabelPolicy]) -> LabelPolicy:
    if isinstance(value, LabelPolicy):
        return value
    return LabelPolicy(value.strip().lower())


def synthesize_label(authors: str, date: str) -> str:
    """First author's surname plus the four-character year, e.g. Quataert2008."""
    surname = authors.split(",", 1)[0].split(";", 1)[0].strip()
    # BibTeX keys cannot hold spaces: "{van Dokkum}" becomes "vanDokkum".
    surname = re.sub(r"\s+", "", surname.replace("{", "").replace("}", ""))
    if not surname:
        return ""
    return f"{surname}{date[:4]}"


def record_label(record: str) -> str:
    """The existing key of a BibTeX record, or "" when none is found."""
    m = _KEY_PATTERN.match(record)
    return m.group(2).strip() if m else ""


def _plain(value: str) -> str:
    return " ".join(value.replace("{", "").replace("}", "").split())


def _record_authors_and_year(record: str) -> tuple[str, str]:
    """Author string and year read from the record's own fields."""
    parser = BibTexParser(common_strings=True, ignore_nonstandard_types=False)
    db = bibtexparser.loads(record, parser=parser)
    if not db.entries:
        return "", ""
    fields = db.entries[0]
    return _plain(fields.get("author", "")), _plain(fields.get("year", ""))


def apply_label_policy(
    record: str,
    authors: str,
    date: str,
    policy: Union[str, LabelPolicy] = LabelPolicy.AUTHOR_YEAR,
) -> str:
    """Rewrite the record key according to ``policy``.

    An empty synthesized label leaves the record untouched.
    """
    if parse_policy(policy) is LabelPolicy.VERBATIM:
        return record

    label = synthesize_label(authors, date)
    if not label or not record_label(record):
        return record
    return _KEY_PATTERN.sub(lambda m: f"{m.group(1)}{label},", record, count=1)


def resolve_citation(
    identifier: str,
    policy: Union[str, LabelPolicy] = LabelPolicy.AUTHOR_YEAR,
    *,
    authors: str | None = None,
    date: str | None = None,
) -> str:
    """Fetch the BibTeX record for ``identifier`` and apply the label policy.

    When ``authors`` and ``date`` are not given (the identifier was not
    picked from the current listing) they are read from the record itself.
    """
    record = client.fetch_bibtex(identifier)
    if authors is None or date is None:
        rec_authors, rec_year = _record_authors_and_year(record)
        authors = rec_authors if authors is None else authors
        date = rec_year if date is None else date
    return apply_label_policy(record, authors, date, policy)
