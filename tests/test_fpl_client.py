"""
Tests for the standings HTTP client and the standings payload schema.

All HTTP calls are mocked.
"""
import pytest
import sys
import os
from unittest.mock import Mock, patch

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from knockout.exceptions import FPLAPIError, InvalidPayloadError
from knockout.fpl_client import fetch_standings_page, standings_url
from knockout.models import StandingsPage, StandingEntry


SAMPLE_PAGE = {
    'league': {'id': 314, 'name': 'Overall'},
    'standings': {
        'has_next': True,
        'page': 1,
        'results': [
            {'entry': 1001, 'rank': 1, 'entry_name': 'Eagles', 'player_name': 'A. Manager', 'total': 1500},
            {'entry': 1002, 'rank': 2, 'entry_name': 'Hawks', 'player_name': 'B. Manager', 'total': 1490},
        ],
    },
}


class TestStandingsUrl:

    def test_default_base(self):
        assert standings_url(314, 7) == (
            'https://fantasy.premierleague.com/api/leagues-classic/314/standings/?page_standings=7'
        )

    def test_configured_base(self):
        config = {'fpl_api_base': 'http://localhost:8080/api/'}
        assert standings_url(1, 2, config) == 'http://localhost:8080/api/leagues-classic/1/standings/?page_standings=2'


class TestFetchStandingsPage:
    """Tests for fetching a single standings page."""

    def test_parses_page(self):
        with patch('knockout.fpl_client.requests.get') as mock_get:
            mock_get.return_value = Mock(status_code=200, ok=True, json=Mock(return_value=SAMPLE_PAGE))
            page = fetch_standings_page(314, 1)

        assert page.has_next is True
        assert [r.entry for r in page.results] == [1001, 1002]
        assert page.last_rank == 2
        mock_get.assert_called_once_with(
            'https://fantasy.premierleague.com/api/leagues-classic/314/standings/?page_standings=1',
            timeout=10,
        )

    def test_not_found_returns_none(self):
        with patch('knockout.fpl_client.requests.get') as mock_get:
            mock_get.return_value = Mock(status_code=404, ok=False)
            assert fetch_standings_page(314, 5000) is None

    def test_server_error_raises(self):
        with patch('knockout.fpl_client.requests.get') as mock_get:
            mock_get.return_value = Mock(status_code=503, ok=False)
            with pytest.raises(FPLAPIError) as exc_info:
                fetch_standings_page(314, 1)
        assert exc_info.value.status_code == 503

    def test_uses_session_and_timeout(self):
        session = Mock()
        session.get.return_value = Mock(status_code=200, ok=True, json=Mock(return_value=SAMPLE_PAGE))
        fetch_standings_page(314, 1, config={'request_timeout_seconds': 3}, session=session)
        assert session.get.call_args.kwargs['timeout'] == 3


class TestStandingsSchema:
    """Tests for validating raw payloads at the boundary."""

    def test_inner_object_accepted(self):
        page = StandingsPage.from_json({'has_next': False, 'results': [{'entry': 5, 'rank': 1}]})
        assert page.has_next is False
        assert page.results[0].entry == 5

    def test_empty_results(self):
        page = StandingsPage.from_json({'standings': {'has_next': False, 'results': []}})
        assert page.results == []
        assert page.last_rank is None

    def test_missing_results(self):
        with pytest.raises(InvalidPayloadError):
            StandingsPage.from_json({'standings': {'has_next': False}})

    def test_not_an_object(self):
        with pytest.raises(InvalidPayloadError):
            StandingsPage.from_json(['nope'])

    def test_row_without_rank(self):
        with pytest.raises(InvalidPayloadError):
            StandingEntry.from_json({'entry': 1})

    def test_numeric_strings_converted(self):
        row = StandingEntry.from_json({'entry': '77', 'rank': '3'})
        assert row.entry == 77
        assert row.rank == 3
