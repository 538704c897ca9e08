"""Tests for adsbib.links - resource URL construction."""

from urllib.parse import parse_qs, urlparse

import pytest

from adsbib.links import LINK_TYPES, ResourceKind, parse_kind, resource_url

BIBCODE = "2008ApJ...681..626Q"


class TestResourceUrl:
    def test_journal_and_preprint_differ_only_in_link_type(self):
        journal = resource_url(BIBCODE, ResourceKind.JOURNAL)
        preprint = resource_url(BIBCODE, ResourceKind.ARXIV_PREPRINT)
        assert journal != preprint
        assert journal.replace("link_type=EJOURNAL", "link_type=PREPRINT") == preprint

    @pytest.mark.parametrize("kind", list(ResourceKind))
    def test_every_kind_has_a_token(self, kind):
        url = resource_url(BIBCODE, kind)
        assert parse_qs(urlparse(url).query)["link_type"] == [LINK_TYPES[kind]]

    def test_kind_by_name(self):
        assert resource_url(BIBCODE, "simbad") == resource_url(BIBCODE, ResourceKind.SIMBAD)

    def test_unknown_kind_still_well_formed(self):
        url = resource_url(BIBCODE, "hologram")
        parsed = urlparse(url)
        assert parsed.scheme == "https"
        assert parsed.netloc == "adsabs.harvard.edu"
        query = parse_qs(parsed.query, keep_blank_values=True)
        assert query["bibcode"] == [BIBCODE]
        assert query["link_type"] == [""]

    def test_none_kind(self):
        assert "link_type=&" in resource_url(BIBCODE, None)

    def test_identifier_escaped(self):
        url = resource_url("2007A&A...470..449S", ResourceKind.ARTICLE)
        assert "bibcode=2007A%26A...470..449S&" in url
        assert parse_qs(urlparse(url).query)["bibcode"] == ["2007A&A...470..449S"]


class TestParseKind:
    def test_case_insensitive(self):
        assert parse_kind("NED") is ResourceKind.NED
        assert parse_kind("ned") is ResourceKind.NED
        assert parse_kind("Data-Archive") is ResourceKind.DATA_ARCHIVE

    def test_unknown(self):
        assert parse_kind("bogus") is None
