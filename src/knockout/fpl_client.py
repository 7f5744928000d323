"""
Client for the FPL classic-league standings listing.
"""
import logging
from typing import Optional

import requests

from knockout.config import get_setting
from knockout.exceptions import FPLAPIError
from knockout.models import StandingsPage

logger = logging.getLogger(__name__)


def standings_url(league_id: int, page: int, config: Optional[dict] = None) -> str:
    base = get_setting(config, 'fpl_api_base').rstrip('/')
    return f"{base}/leagues-classic/{league_id}/standings/?page_standings={page}"


def fetch_standings_page(league_id: int, page: int, config: Optional[dict] = None,
                         session: Optional[requests.Session] = None) -> Optional[StandingsPage]:
    """
    Fetch a single page of league standings.
    Returns None if the page doesn't exist (404).
    """
    url = standings_url(league_id, page, config)
    http = session or requests
    response = http.get(url, timeout=get_setting(config, 'request_timeout_seconds'))

    if response.status_code == 404:
        logger.debug(f"League {league_id} page {page}: not found")
        return None
    if not response.ok:
        raise FPLAPIError(response.status_code, url)

    return StandingsPage.from_json(response.json())
