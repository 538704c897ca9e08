"""Encode advanced search criteria as a classic abstract service query string.

The parameter order below is what the classic service expects.  Boolean
toggles are present only when set; every other field is always emitted,
with an empty value when unset.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union
from urllib.parse import quote_plus


class Combinator(str, Enum):
    OR = "OR"
    AND = "AND"
    SIMPLE = "SIMPLE"
    BOOL = "BOOL"


# Author and object fields only combine with OR/AND.
LIST_COMBINATORS = {Combinator.OR, Combinator.AND}

DATABASE_KEYS = (
    ("astronomy", "db_key", "AST"),
    ("physics", "db_key", "PHY"),
    ("preprints", "db_key", "PRE"),
)

CATALOG_KEYS = (
    ("simbad", "sim_query", "YES"),
    ("ned", "ned_query", "YES"),
    ("ads_objects", "adsobj_query", "YES"),
)

FIXED_PARAMS = (
    ("nr_to_return", "200"),
    ("start_nr", "1"),
    ("sort", "SCORE"),
    ("aut_syn", "YES"),
    ("ttl_syn", "YES"),
    ("txt_syn", "YES"),
    ("data_type", "SHORT"),
)


def _combinator(value: Union[str, Combinator, None]) -> Optional[Combinator]:
    if value is None or value == "":
        return None
    if isinstance(value, Combinator):
        return value
    try:
        return Combinator(value.strip().upper())
    except ValueError:
        raise ValueError(f"Unknown combinator: {value!r}") from None


@dataclass
class AdvancedSearchCriteria:
    """Structured input for an advanced search.  Every field is optional."""

    astronomy: bool = False
    physics: bool = False
    preprints: bool = False
    authors: list[str] = field(default_factory=list)
    author_logic: Optional[Combinator] = None
    start_month: Optional[int] = None
    start_year: Optional[int] = None
    end_month: Optional[int] = None
    end_year: Optional[int] = None
    simbad: bool = False
    ned: bool = False
    ads_objects: bool = False
    objects: str = ""
    object_logic: Optional[Combinator] = None
    title: str = ""
    title_logic: Optional[Combinator] = None
    abstract: str = ""
    abstract_logic: Optional[Combinator] = None

    def __post_init__(self) -> None:
        self.author_logic = _combinator(self.author_logic)
        self.object_logic = _combinator(self.object_logic)
        self.title_logic = _combinator(self.title_logic)
        self.abstract_logic = _combinator(self.abstract_logic)
        for name in ("author_logic", "object_logic"):
            value = getattr(self, name)
            if value is not None and value not in LIST_COMBINATORS:
                raise ValueError(f"{name} must be OR or AND, got {value.value}")
        for name in ("start_month", "end_month"):
            value = getattr(self, name)
            if value is not None and not 1 <= value <= 12:
                raise ValueError(f"{name} must be between 1 and 12, got {value}")


def _text(value: str) -> str:
    return quote_plus(value.strip())


def _number(value: Optional[int]) -> str:
    return "" if value is None else str(value)


def _logic(value: Optional[Combinator]) -> str:
    return "" if value is None else value.value


def encode_criteria(criteria: AdvancedSearchCriteria) -> str:
    """Serialize ``criteria`` into one query string."""
    params: list[tuple[str, str]] = []

    for attr, name, value in DATABASE_KEYS + CATALOG_KEYS:
        if getattr(criteria, attr):
            params.append((name, value))

    authors = ";".join(a.strip() for a in criteria.authors if a.strip())
    params += [
        ("aut_logic", _logic(criteria.author_logic)),
        ("author", _text(authors)),
        ("start_mon", _number(criteria.start_month)),
        ("start_year", _number(criteria.start_year)),
        ("end_mon", _number(criteria.end_month)),
        ("end_year", _number(criteria.end_year)),
        ("obj_logic", _logic(criteria.object_logic)),
        ("object", _text(criteria.objects)),
        ("ttl_logic", _logic(criteria.title_logic)),
        ("title", _text(criteria.title)),
        ("txt_logic", _logic(criteria.abstract_logic)),
        ("text", _text(criteria.abstract)),
    ]
    params += FIXED_PARAMS

    return "&".join(f"{name}={value}" for name, value in params)
