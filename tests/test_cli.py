"""Tests for the ads CLI - command registration and end-to-end flows."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from adsbib import storage
from adsbib.cli import cli

FIXTURES = Path(__file__).parent / "fixtures"

RECORD = "@ARTICLE{2008ApJ...681..626Q,\n       author = {{Quataert}, Eliot},\n         year = 2008,\n}\n"


def _mock_response(json_data=None, text=""):
    mock = MagicMock()
    mock.status_code = 200
    mock.json.return_value = json_data
    mock.text = text
    mock.raise_for_status.return_value = None
    return mock


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def tmp_ads_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(storage, "ADS_DIR", tmp_path)
    monkeypatch.delenv("ADS_LABEL_POLICY", raising=False)
    return tmp_path


@pytest.fixture
def token(monkeypatch):
    monkeypatch.setenv("ADS_API_TOKEN", "test-token")


class TestHelp:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("search", "advanced", "list", "cite", "link", "details", "env"):
            assert command in result.output

    def test_link_help(self, runner):
        result = runner.invoke(cli, ["link", "--help"])
        assert result.exit_code == 0
        assert "KIND" in result.output


class TestEnv:
    def test_env_shows_status(self, runner):
        result = runner.invoke(cli, ["env"])
        assert result.exit_code == 0
        assert "ADS_API_TOKEN" in result.output

    def test_env_set_invalid_key(self, runner):
        result = runner.invoke(cli, ["env", "set", "SERPER_API_KEY", "value"])
        assert result.exit_code == 1
        assert "Unknown key" in result.output

    def test_env_set_saves_key(self, runner, tmp_path, monkeypatch):
        import adsbib.config as config
        monkeypatch.setattr(config, "ADS_DIR", tmp_path)
        monkeypatch.setattr(config, "PERSISTENT_ENV", tmp_path / ".env")
        monkeypatch.delenv("ADS_API_TOKEN", raising=False)

        result = runner.invoke(cli, ["env", "set", "ads_api_token", "tok-123"])
        assert result.exit_code == 0
        assert "Saved ADS_API_TOKEN" in result.output
        assert "ADS_API_TOKEN=tok-123" in (tmp_path / ".env").read_text()


class TestSearch:
    def test_missing_token(self, runner, monkeypatch):
        monkeypatch.delenv("ADS_API_TOKEN", raising=False)
        with patch("adsbib.client._get") as mock_get:
            result = runner.invoke(cli, ["search", "plasma"])
        assert result.exit_code == 1
        assert "ADS_API_TOKEN" in result.output
        mock_get.assert_not_called()

    @patch("adsbib.client._get")
    def test_search_then_list(self, mock_get, runner, token):
        mock_get.return_value = _mock_response({
            "response": {
                "docs": [
                    {"bibcode": "2008ApJ...681..626Q", "year": "2008", "author": ["Quataert, E."],
                     "title": ["Buoyancy Instabilities"], "score": 1.0},
                ]
            }
        })

        result = runner.invoke(cli, ["search", "plasma"])
        assert result.exit_code == 0
        assert "2008ApJ...681..626Q" in result.output

        result = runner.invoke(cli, ["list"])
        assert result.exit_code == 0
        assert "Found 1 results for 'plasma'" in result.output

    @patch("adsbib.client._get")
    def test_advanced(self, mock_get, runner):
        mock_get.return_value = _mock_response(text=(FIXTURES / "legacy_listing.html").read_text())

        result = runner.invoke(cli, ["advanced", "--author", "Quataert, E.", "--title", "buoyancy",
                                     "--title-logic", "AND"])
        assert result.exit_code == 0
        assert "2007A&A...470..449S" in result.output
        url = mock_get.call_args.args[0]
        assert "db_key=AST" in url
        assert "ttl_logic=AND&title=buoyancy" in url

    def test_advanced_rejects_simple_author_logic(self, runner):
        result = runner.invoke(cli, ["advanced", "--author-logic", "SIMPLE"])
        assert result.exit_code != 0

    def test_list_without_results(self, runner):
        result = runner.invoke(cli, ["list"])
        assert result.exit_code == 0
        assert "No results found" in result.output


class TestFollowUps:
    @pytest.fixture(autouse=True)
    def listing(self):
        from adsbib.models import Entry, ResultSet
        storage.save_results(ResultSet(
            entries=(Entry(index=1, identifier="2008ApJ...681..626Q", date="2008", authors=("Quataert, E.",)),),
            query="plasma",
        ))

    @patch("adsbib.client._post")
    def test_cite(self, mock_post, runner, token):
        mock_post.return_value = _mock_response({"export": RECORD})
        result = runner.invoke(cli, ["cite", "1"])
        assert result.exit_code == 0
        assert "@ARTICLE{Quataert2008," in result.output

    @patch("adsbib.client._post")
    def test_cite_verbatim(self, mock_post, runner, token):
        mock_post.return_value = _mock_response({"export": RECORD})
        result = runner.invoke(cli, ["cite", "1", "--policy", "verbatim"])
        assert result.exit_code == 0
        assert "@ARTICLE{2008ApJ...681..626Q," in result.output

    def test_cite_unknown_index(self, runner, token):
        result = runner.invoke(cli, ["cite", "4"])
        assert result.exit_code == 1
        assert "No entry" in result.output

    def test_link(self, runner):
        result = runner.invoke(cli, ["link", "1", "arxiv-preprint"])
        assert result.exit_code == 0
        assert "bibcode=2008ApJ...681..626Q&link_type=PREPRINT" in result.output

    def test_link_open(self, runner):
        with patch("adsbib.cli.click.launch") as mock_launch:
            result = runner.invoke(cli, ["link", "1", "ned", "--open"])
        assert result.exit_code == 0
        assert "link_type=NED" in mock_launch.call_args.args[0]

    @patch("adsbib.client._get")
    def test_details(self, mock_get, runner, token):
        mock_get.return_value = _mock_response({
            "response": {"docs": [{"bibcode": "2008ApJ...681..626Q", "title": ["Buoyancy"],
                                   "pub": "ApJ", "citation_count": 3}]}
        })
        result = runner.invoke(cli, ["details", "1"])
        assert result.exit_code == 0
        assert "cited by 3" in result.output
