"""
League size discovery over the paginated standings listing.

The listing only says whether another page exists, so the last page is
found by probing exponentially for an upper bound and then binary
searching. The count is the rank of the last entry on the last page.
"""
import logging
from typing import Callable, Optional

from knockout.config import get_setting
from knockout.exceptions import LeagueNotFoundError
from knockout.fpl_client import fetch_standings_page
from knockout.models import StandingsPage

logger = logging.getLogger(__name__)

PageFetcher = Callable[[int, int], Optional[StandingsPage]]


def _is_past_end(page: Optional[StandingsPage]) -> bool:
    """Missing and empty pages both mean we overshot the last page."""
    return page is None or not page.results


def get_league_participant_count(league_id: int, fetch_page: Optional[PageFetcher] = None,
                                 config: Optional[dict] = None) -> int:
    """
    Find the total participant count for a league.

    Algorithm:
    1. Fetch page 1 to check if small league (no has_next)
    2. If has_next, probe exponentially (100, 1000, 10000) for an upper bound
    3. Binary search for the last populated page
    4. Count = rank of the last entry on that page

    fetch_page(league_id, page) returns a StandingsPage or None; it defaults
    to the live standings API. A missing page 1 raises LeagueNotFoundError;
    an empty single page means an empty league and counts as 0.
    """
    if fetch_page is None:
        def fetch_page(lid, page):
            return fetch_standings_page(lid, page, config)

    # Step 1: page 1
    first = fetch_page(league_id, 1)
    if first is None:
        raise LeagueNotFoundError(league_id)

    if not first.has_next:
        count = first.last_rank or 0
        logger.info(f"League {league_id}: single page, {count} participants")
        return count

    # Step 2: exponential probing for an upper bound
    probe_multiplier = get_setting(config, 'probe_multiplier')
    max_probe_page = get_setting(config, 'max_probe_page')
    lower_bound = 1
    upper_bound = get_setting(config, 'probe_start_page')

    while True:
        probe = fetch_page(league_id, upper_bound)
        if _is_past_end(probe):
            logger.debug(f"League {league_id}: page {upper_bound} is past the end")
            break
        if not probe.has_next:
            logger.info(f"League {league_id}: last page {upper_bound} found while probing")
            return probe.last_rank
        lower_bound = upper_bound
        upper_bound *= probe_multiplier

        if upper_bound > max_probe_page:
            upper_bound = max_probe_page
            break

    # Step 3: binary search between the last populated page and the overshoot
    while lower_bound < upper_bound - 1:
        mid = (lower_bound + upper_bound) // 2
        probe = fetch_page(league_id, mid)

        if _is_past_end(probe):
            upper_bound = mid
        elif not probe.has_next:
            logger.info(f"League {league_id}: last page is {mid}")
            return probe.last_rank
        else:
            lower_bound = mid

    # Step 4: bounds are adjacent, lower_bound is the last confirmed page
    last_page = fetch_page(league_id, lower_bound)
    if _is_past_end(last_page):
        raise LeagueNotFoundError(league_id)

    if last_page.has_next:
        next_page = fetch_page(league_id, lower_bound + 1)
        if not _is_past_end(next_page) and not next_page.has_next:
            return next_page.last_rank

    logger.info(f"League {league_id}: last page is {lower_bound}")
    return last_page.last_rank


def get_tournament_size_tier(count: int, config: Optional[dict] = None) -> str:
    """Tournament size tier: 'standard', 'large' or 'mega'."""
    if count <= get_setting(config, 'standard_tier_max'):
        return 'standard'
    if count <= get_setting(config, 'large_tier_max'):
        return 'large'
    return 'mega'
