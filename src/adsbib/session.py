"""The current result set and the operations that read it."""

from __future__ import annotations

import logging
from typing import Optional, Union

from adsbib import client, storage
from adsbib.citation import LabelPolicy, resolve_citation
from adsbib.config import get_label_policy
from adsbib.exceptions import NotFoundError
from adsbib.links import ResourceKind, resource_url
from adsbib.models import Entry, EntryDetails, ResultSet
from adsbib.normalizer import normalize
from adsbib.query import AdvancedSearchCriteria, encode_criteria

logger = logging.getLogger(__name__)


class Session:
    """Holds one ResultSet at a time; every search replaces it wholesale.

    With ``persist=True`` the listing is written to ~/.ads/results.json after
    each search so a later process can pick it up via ``Session.restore()``.
    """

    def __init__(self, results: Optional[ResultSet] = None, *, persist: bool = False) -> None:
        self.results = results if results is not None else ResultSet()
        self.persist = persist

    @classmethod
    def restore(cls) -> Session:
        return cls(storage.load_results(), persist=True)

    @property
    def last_query(self) -> Optional[str]:
        return self.results.query

    def _replace(self, results: ResultSet) -> ResultSet:
        self.results = results
        if self.persist:
            storage.save_results(results)
        logger.debug("Result set replaced: %d entries", len(results))
        return results

    # --- Producers ---

    def search(self, query: str) -> ResultSet:
        raw = client.search(query)
        return self._replace(normalize(raw, query=query))

    def search_advanced(self, criteria: AdvancedSearchCriteria) -> ResultSet:
        raw = client.search_classic(encode_criteria(criteria))
        return self._replace(normalize(raw))

    # --- Readers ---

    def lookup(self, ref: Union[int, str]) -> Entry:
        """Find an entry by display index or identifier."""
        entry = None
        if isinstance(ref, int):
            entry = self.results.by_index(ref)
        else:
            ref = ref.strip()
            if ref.isdigit():
                entry = self.results.by_index(int(ref))
            if entry is None:
                entry = self.results.by_identifier(ref)
        if entry is None:
            raise NotFoundError(f"No entry {ref!r} in the current listing")
        return entry

    def _find(self, ref: Union[int, str]) -> Optional[Entry]:
        try:
            return self.lookup(ref)
        except NotFoundError:
            return None

    def _identifier(self, ref: Union[int, str]) -> str:
        """Identifier for ``ref``; a non-index string passes through as-is."""
        entry = self._find(ref)
        if entry is not None:
            return entry.identifier
        if isinstance(ref, int) or ref.strip().isdigit():
            raise NotFoundError(f"No entry {ref!r} in the current listing")
        return ref.strip()

    def resolve_citation(
        self,
        ref: Union[int, str],
        policy: Union[str, LabelPolicy, None] = None,
    ) -> str:
        policy = policy or get_label_policy()
        entry = self._find(ref)
        if entry is None:
            return resolve_citation(self._identifier(ref), policy)
        return resolve_citation(
            entry.identifier,
            policy,
            authors=entry.author_string,
            date=entry.date,
        )

    def resource_url(self, ref: Union[int, str], kind: Union[ResourceKind, str, None]) -> str:
        return resource_url(self._identifier(ref), kind)

    def details(self, ref: Union[int, str]) -> EntryDetails:
        return client.fetch_details(self._identifier(ref))
