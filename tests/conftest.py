"""
Shared pytest fixtures for bracket engine tests.

Running tests:
    pytest tests/
"""
import pytest
import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from knockout.models import StandingEntry, StandingsPage


def make_roster(count, first_entry=1001):
    """Roster of `count` entries ordered by rank."""
    return [
        StandingEntry(entry=first_entry + i, rank=i + 1, entry_name=f"Team {i + 1}")
        for i in range(count)
    ]


class SimulatedLeague:
    """
    Paginated standings listing held in memory.

    Pages past the end return None (like a 404) and every request is
    recorded so tests can assert how many pages were fetched.
    """

    def __init__(self, total_pages, per_page=50, last_page_size=None, missing=False):
        self.total_pages = total_pages
        self.per_page = per_page
        self.last_page_size = per_page if last_page_size is None else last_page_size
        self.missing = missing
        self.requests = []

    def page_size(self, page):
        if page == self.total_pages:
            return self.last_page_size
        return self.per_page

    def fetch_page(self, league_id, page):
        self.requests.append(page)
        if self.missing or page < 1 or page > self.total_pages:
            return None
        start_rank = (page - 1) * self.per_page + 1
        results = [
            StandingEntry(entry=50000 + start_rank + i, rank=start_rank + i)
            for i in range(self.page_size(page))
        ]
        return StandingsPage(has_next=page < self.total_pages, results=results)


@pytest.fixture
def roster_factory():
    return make_roster


@pytest.fixture
def simulated_league():
    return SimulatedLeague
