"""Follow-up resource URLs for a bibcode (journal page, PDF, data, catalogs)."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union
from urllib.parse import quote

LINK_TEMPLATE = (
    "https://adsabs.harvard.edu/cgi-bin/nph-data_query"
    "?bibcode={identifier}&link_type={link_type}&db_key=ALL"
)


class ResourceKind(str, Enum):
    JOURNAL = "journal"
    ARTICLE = "article"
    ARXIV_PREPRINT = "arxiv-preprint"
    DATA_ARCHIVE = "data-archive"
    SIMBAD = "SIMBAD"
    NED = "NED"


LINK_TYPES = {
    ResourceKind.JOURNAL: "EJOURNAL",
    ResourceKind.ARTICLE: "ARTICLE",
    ResourceKind.ARXIV_PREPRINT: "PREPRINT",
    ResourceKind.DATA_ARCHIVE: "DATA",
    ResourceKind.SIMBAD: "SIMBAD",
    ResourceKind.NED: "NED",
}


def parse_kind(text: str) -> Optional[ResourceKind]:
    """Match a kind name case-insensitively; None when unknown."""
    wanted = text.strip().lower()
    for kind in ResourceKind:
        if kind.value.lower() == wanted:
            return kind
    return None


def resource_url(identifier: str, kind: Union[ResourceKind, str, None]) -> str:
    """URL for one resource of ``identifier``.

    Unknown kinds get an empty link type; the URL is still well formed.
    """
    if not isinstance(kind, ResourceKind):
        kind = parse_kind(kind) if kind else None
    link_type = LINK_TYPES.get(kind, "") if kind is not None else ""
    return LINK_TEMPLATE.format(
        identifier=quote(identifier, safe=""),
        link_type=link_type,
    )
