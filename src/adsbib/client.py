"""NASA ADS API wrapper: search, BibTeX export and record details."""

from __future__ import annotations

import logging

import httpx

from adsbib.config import get_ads_token, get_timeout
from adsbib.exceptions import AuthError, NotFoundError, TransportError
from adsbib.models import EntryDetails, LegacyTableResult, StructuredResult

logger = logging.getLogger(__name__)

ADS_API_BASE = "https://api.adsabs.harvard.edu/v1"
CLASSIC_BASE = "https://adsabs.harvard.edu/cgi-bin"

SEARCH_FIELDS = "bibcode,year,author,title,score"
DETAIL_FIELDS = "bibcode,title,author,year,pub,abstract,citation_count"
MAX_ROWS = 2000


def _headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _get(url: str, **kwargs) -> httpx.Response:
    logger.debug("GET %s", url)
    try:
        return httpx.get(url, **kwargs)
    except httpx.HTTPError as e:
        raise TransportError(f"Request to {url} failed: {e}") from e


def _post(url: str, **kwargs) -> httpx.Response:
    logger.debug("POST %s", url)
    try:
        return httpx.post(url, **kwargs)
    except httpx.HTTPError as e:
        raise TransportError(f"Request to {url} failed: {e}") from e


def _check(resp: httpx.Response, *, authenticated: bool = True) -> None:
    """Map HTTP failures onto our error kinds.

    401/403 only mean a bad token on authenticated calls; the anonymous
    classic service reports them as a transport failure.
    """
    if authenticated and resp.status_code in (401, 403):
        raise AuthError(f"ADS rejected the API token (HTTP {resp.status_code})")
    try:
        resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise TransportError(f"ADS returned HTTP {resp.status_code}") from e


def _json(resp: httpx.Response) -> dict:
    try:
        return resp.json()
    except ValueError as e:
        raise TransportError("ADS returned a body that is not JSON") from e


def _docs(data: dict) -> list[dict]:
    return (data.get("response") or {}).get("docs") or []


def search(query: str) -> StructuredResult:
    """Free-text search against the JSON API."""
    token = get_ads_token()
    resp = _get(
        f"{ADS_API_BASE}/search/query",
        params={
            "q": query,
            "fl": SEARCH_FIELDS,
            "rows": MAX_ROWS,
            "sort": "score desc",
        },
        headers=_headers(token),
        timeout=get_timeout(),
    )
    _check(resp)
    return StructuredResult(docs=_docs(_json(resp)))


def search_classic(encoded_query: str) -> LegacyTableResult:
    """Run an encoded advanced query against the classic abstract service.

    The classic service is anonymous and answers with an HTML listing.
    """
    resp = _get(
        f"{CLASSIC_BASE}/nph-abs_connect?{encoded_query}",
        timeout=get_timeout(),
        follow_redirects=True,
    )
    _check(resp, authenticated=False)
    return LegacyTableResult(markup=resp.text)


def fetch_bibtex(identifier: str) -> str:
    """Fetch the verbatim BibTeX record for one bibcode."""
    token = get_ads_token()
    resp = _post(
        f"{ADS_API_BASE}/export/bibtex",
        json={"bibcode": [identifier]},
        headers={**_headers(token), "Content-Type": "application/json"},
        timeout=get_timeout(),
    )
    if resp.status_code == 404:
        raise NotFoundError(f"No BibTeX record for {identifier}")
    _check(resp)
    record = _json(resp).get("export") or ""
    if not record.strip():
        raise NotFoundError(f"No BibTeX record for {identifier}")
    return record


def fetch_details(identifier: str) -> EntryDetails:
    """Fetch abstract, journal and citation count for one bibcode."""
    token = get_ads_token()
    resp = _get(
        f"{ADS_API_BASE}/search/query",
        params={
            "q": f'identifier:"{identifier}"',
            "fl": DETAIL_FIELDS,
            "rows": 1,
        },
        headers=_headers(token),
        timeout=get_timeout(),
    )
    _check(resp)
    docs = _docs(_json(resp))
    if not docs:
        raise NotFoundError(f"No record found for {identifier}")

    doc = docs[0]
    title_list = doc.get("title") or []
    return EntryDetails(
        identifier=doc.get("bibcode") or identifier,
        title=title_list[0] if title_list else "",
        authors=list(doc.get("author") or []),
        year=str(doc.get("year") or ""),
        journal=doc.get("pub") or "",
        abstract=doc.get("abstract") or "",
        citation_count=doc.get("citation_count"),
    )
