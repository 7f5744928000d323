from knockout.exceptions import InvalidPayloadError


MATCH_PENDING = 'pending'
MATCH_ACTIVE = 'active'
MATCH_COMPLETE = 'complete'


class BracketSpec:
    def __init__(self, participant_count, group_size, total_slots, total_rounds, bye_count, groups_per_round):
        self.participant_count = participant_count
        self.group_size = group_size
        self.total_slots = total_slots
        self.total_rounds = total_rounds
        self.bye_count = bye_count
        self.groups_per_round = groups_per_round

    def to_dict(self):
        return {
            'participant_count': self.participant_count,
            'group_size': self.group_size,
            'total_slots': self.total_slots,
            'total_rounds': self.total_rounds,
            'bye_count': self.bye_count,
            'groups_per_round': list(self.groups_per_round),
        }

    def __repr__(self):
        return (f"BracketSpec(participant_count={self.participant_count}, group_size={self.group_size}, "
                f"total_slots={self.total_slots}, total_rounds={self.total_rounds}, "
                f"bye_count={self.bye_count}, groups_per_round={self.groups_per_round})")


class Match:
    def __init__(self, match_id, round_number, position_in_round, qualifies_to_match_id=None,
                 is_bye=False, status=MATCH_PENDING, winner_id=None):
        self.match_id = match_id
        self.round_number = round_number
        self.position_in_round = position_in_round
        self.qualifies_to_match_id = qualifies_to_match_id  # None only for the final
        self.is_bye = is_bye
        self.status = status
        self.winner_id = winner_id

    def to_dict(self):
        return {
            'match_id': self.match_id,
            'round_number': self.round_number,
            'position_in_round': self.position_in_round,
            'qualifies_to_match_id': self.qualifies_to_match_id,
            'is_bye': self.is_bye,
            'status': self.status,
            'winner_id': self.winner_id,
        }

    def __repr__(self):
        return (f"Match(match_id={self.match_id}, round={self.round_number}, position={self.position_in_round}, "
                f"qualifies_to={self.qualifies_to_match_id}, is_bye={self.is_bye}, status={self.status})")


class MatchPick:
    def __init__(self, match_id, entry_id, slot, seed=None):
        self.match_id = match_id
        self.entry_id = entry_id
        self.slot = slot
        self.seed = seed

    def to_dict(self):
        return {'match_id': self.match_id, 'entry_id': self.entry_id, 'slot': self.slot, 'seed': self.seed}

    def __repr__(self):
        return f"MatchPick(match_id={self.match_id}, entry_id={self.entry_id}, slot={self.slot}, seed={self.seed})"


class MatchResult:
    def __init__(self, match_id, winner_slot, winner_id, loser_id, winner_score, loser_score,
                 decided_by_tiebreaker=False):
        self.match_id = match_id
        self.winner_slot = winner_slot
        self.winner_id = winner_id
        self.loser_id = loser_id
        self.winner_score = winner_score
        self.loser_score = loser_score
        self.decided_by_tiebreaker = decided_by_tiebreaker

    def to_dict(self):
        return {
            'match_id': self.match_id,
            'winner_slot': self.winner_slot,
            'winner_id': self.winner_id,
            'loser_id': self.loser_id,
            'winner_score': self.winner_score,
            'loser_score': self.loser_score,
            'decided_by_tiebreaker': self.decided_by_tiebreaker,
        }

    def __repr__(self):
        return (f"MatchResult(match_id={self.match_id}, winner_id={self.winner_id}, loser_id={self.loser_id}, "
                f"score={self.winner_score}-{self.loser_score}, tiebreaker={self.decided_by_tiebreaker})")


class NWayScore:
    def __init__(self, entry_id, slot, seed, points, transfer_cost=0, bench_points=0):
        self.entry_id = entry_id
        self.slot = slot
        self.seed = seed
        self.points = points
        self.transfer_cost = transfer_cost
        self.bench_points = bench_points

    def __repr__(self):
        return f"NWayScore(entry_id={self.entry_id}, seed={self.seed}, points={self.points})"


class NWayMatchResult:
    def __init__(self, match_id, winner_id, rankings, decided_by_tiebreaker=False):
        self.match_id = match_id
        self.winner_id = winner_id
        self.rankings = rankings  # list of {'entry_id', 'rank', 'points'}
        self.decided_by_tiebreaker = decided_by_tiebreaker

    def to_dict(self):
        return {
            'match_id': self.match_id,
            'winner_id': self.winner_id,
            'rankings': [dict(r) for r in self.rankings],
            'decided_by_tiebreaker': self.decided_by_tiebreaker,
        }

    def __repr__(self):
        return f"NWayMatchResult(match_id={self.match_id}, winner_id={self.winner_id})"


class StandingEntry:
    """One row of a league standings page."""

    def __init__(self, entry, rank, entry_name=None, player_name=None, total=None):
        self.entry = entry
        self.rank = rank
        self.entry_name = entry_name
        self.player_name = player_name
        self.total = total

    @classmethod
    def from_json(cls, data):
        if not isinstance(data, dict):
            raise InvalidPayloadError(f"Standings row must be an object, got {type(data).__name__}")
        try:
            entry = int(data['entry'])
            rank = int(data['rank'])
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidPayloadError(f"Standings row is missing a valid entry or rank: {e}") from e
        return cls(
            entry=entry,
            rank=rank,
            entry_name=data.get('entry_name'),
            player_name=data.get('player_name'),
            total=data.get('total'),
        )

    def __repr__(self):
        return f"StandingEntry(entry={self.entry}, rank={self.rank}, entry_name={self.entry_name})"


class StandingsPage:
    """
    A single page of the paginated standings listing.

    The API wraps the rows as {'standings': {'has_next': bool, 'results': [...]}};
    from_json accepts either that envelope or the inner object.
    """

    def __init__(self, has_next, results):
        self.has_next = has_next
        self.results = results

    @property
    def last_rank(self):
        if not self.results:
            return None
        return self.results[-1].rank

    @classmethod
    def from_json(cls, data):
        if not isinstance(data, dict):
            raise InvalidPayloadError(f"Standings page must be an object, got {type(data).__name__}")
        standings = data.get('standings', data)
        if not isinstance(standings, dict) or 'results' not in standings:
            raise InvalidPayloadError("Standings page has no 'results'")
        results = standings['results']
        if not isinstance(results, list):
            raise InvalidPayloadError("Standings 'results' must be a list")
        return cls(
            has_next=bool(standings.get('has_next', False)),
            results=[StandingEntry.from_json(row) for row in results],
        )

    def __repr__(self):
        return f"StandingsPage(has_next={self.has_next}, results={len(self.results)})"
