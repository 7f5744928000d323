class KnockoutError(Exception):
    """Base class for errors raised by the bracket engine."""


class LeagueNotFoundError(KnockoutError):
    def __init__(self, league_id):
        self.league_id = league_id
        super().__init__(f"League {league_id} not found")


class FPLAPIError(KnockoutError):
    def __init__(self, status_code, url=None):
        self.status_code = status_code
        self.url = url
        super().__init__(f"FPL API error: {status_code}")


class InvalidPayloadError(KnockoutError):
    """A standings payload did not have the expected shape."""
