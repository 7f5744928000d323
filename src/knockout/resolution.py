"""
Match resolution and round advancement.

Winners are decided on points with the seed as tiebreaker. Advancement
checks are pure functions over a snapshot of the tournament's matches.
"""
import logging
from typing import List, Dict, Optional, Iterable, Set

from knockout.models import MatchPick, MatchResult, NWayMatchResult, MATCH_COMPLETE
from knockout.seeding import get_next_round_slot

logger = logging.getLogger(__name__)


def resolve_match(match, picks: List[MatchPick], scores: Dict[int, int]) -> Optional[MatchResult]:
    """
    Resolve a single 1v1 match given the scores.

    Returns None while the match cannot be resolved yet (wrong number of
    players or a missing score); the caller retries once data is complete.
    """
    if not picks:
        logger.error(f"Match {match.match_id} has no players")
        return None

    # Bye matches are already decided at creation
    if match.is_bye or len(picks) == 1:
        player = picks[0]
        return MatchResult(
            match_id=match.match_id,
            winner_slot=player.slot,
            winner_id=player.entry_id,
            loser_id=None,
            winner_score=scores.get(player.entry_id, 0),
            loser_score=None,
            decided_by_tiebreaker=False,
        )

    if len(picks) != 2:
        logger.error(f"Match {match.match_id} has {len(picks)} players, expected 2")
        return None

    missing = [pick.entry_id for pick in picks if pick.entry_id not in scores]
    if missing:
        logger.warning(f"Match {match.match_id}: cannot resolve - missing scores for entry IDs: "
                       f"{', '.join(str(m) for m in missing)}")
        return None

    player1, player2 = picks
    points1 = scores[player1.entry_id]
    points2 = scores[player2.entry_id]
    decided_by_tiebreaker = False

    if points1 > points2:
        winner, loser = player1, player2
    elif points2 > points1:
        winner, loser = player2, player1
    else:
        # Tie - lower seed wins (seed 1 beats seed 2)
        decided_by_tiebreaker = True
        if player1.seed is None or player2.seed is None:
            raise ValueError(f"Match {match.match_id}: tied players need seeds to break the tie")
        if player1.seed < player2.seed:
            winner, loser = player1, player2
        else:
            winner, loser = player2, player1

    return MatchResult(
        match_id=match.match_id,
        winner_slot=winner.slot,
        winner_id=winner.entry_id,
        loser_id=loser.entry_id,
        winner_score=scores[winner.entry_id],
        loser_score=scores[loser.entry_id],
        decided_by_tiebreaker=decided_by_tiebreaker,
    )


def resolve_nway_match(match_id: int, scores: List) -> Optional[NWayMatchResult]:
    """
    Resolve an N-way match using the FPL tiebreaker cascade:
    1. Points (higher is better)
    2. Transfer cost (lower is better)
    3. Bench points (higher is better)
    4. Seed (lower is better) - fallback for perfect ties
    """
    if not scores:
        return None

    if any(s.seed is None for s in scores):
        raise ValueError(f"Match {match_id}: every player needs a seed for the tiebreaker")

    if len(scores) == 1:
        only = scores[0]
        return NWayMatchResult(
            match_id=match_id,
            winner_id=only.entry_id,
            rankings=[{'entry_id': only.entry_id, 'rank': 1, 'points': only.points}],
            decided_by_tiebreaker=False,
        )

    ranked = sorted(scores, key=lambda s: (-s.points, s.transfer_cost, -s.bench_points, s.seed))
    winner_points = ranked[0].points
    decided_by_tiebreaker = any(s.points == winner_points for s in ranked[1:])

    return NWayMatchResult(
        match_id=match_id,
        winner_id=ranked[0].entry_id,
        rankings=[
            {'entry_id': s.entry_id, 'rank': index + 1, 'points': s.points}
            for index, s in enumerate(ranked)
        ],
        decided_by_tiebreaker=decided_by_tiebreaker,
    )


def index_matches(matches: Iterable) -> Dict[int, object]:
    """Flat lookup of matches by id."""
    return {m.match_id: m for m in matches}


def get_feeder_matches(target_match_id: int, matches: Iterable) -> List:
    """All matches whose winner advances into target_match_id."""
    return [m for m in matches if m.qualifies_to_match_id == target_match_id]


def validate_feeders_complete(target_match_id: int, matches: Iterable) -> Dict:
    """
    Check that every feeder of a match is complete.

    Returns dict with:
    - 'ready': True if all feeders are complete (or there are none, as in round 1)
    - 'incomplete_feeder_ids': feeder ids still blocking the match
    """
    feeders = get_feeder_matches(target_match_id, matches)
    incomplete = [m.match_id for m in feeders if m.status != MATCH_COMPLETE]
    return {
        'ready': not incomplete,
        'incomplete_feeder_ids': incomplete,
    }


def can_populate_next_match(target_match_id: int, matches: Iterable, completed_match_ids: Set[int]) -> Dict:
    """
    Check a match's feeders against an explicit set of completed match ids.

    Useful mid-run, before statuses have been written back. A match with no
    feeders is ready.
    """
    feeder_ids = [m.match_id for m in get_feeder_matches(target_match_id, matches)]
    return {
        'ready': all(match_id in completed_match_ids for match_id in feeder_ids),
        'feeder_match_ids': feeder_ids,
    }


def advance_winners(matches: Iterable, results: Iterable[MatchResult], seeds: Dict[int, int],
                    group_size: int = 2) -> List[MatchPick]:
    """
    Create next-round picks for the winners of resolved matches.

    seeds maps entry id to seed so the new picks keep their tiebreaker;
    a winner missing from it raises ValueError.

    Final-round results produce nothing. Picks are ordered by target match
    then slot.
    """
    by_id = index_matches(matches)
    picks = []
    for result in results:
        match = by_id.get(result.match_id)
        if match is None:
            logger.warning(f"Result for unknown match {result.match_id}")
            continue
        if match.qualifies_to_match_id is None:
            continue
        if seeds.get(result.winner_id) is None:
            raise ValueError(f"No seed for entry {result.winner_id} advancing from match {result.match_id}")
        picks.append(MatchPick(
            match_id=match.qualifies_to_match_id,
            entry_id=result.winner_id,
            slot=get_next_round_slot(match.position_in_round, group_size),
            seed=seeds[result.winner_id],
        ))
    picks.sort(key=lambda p: (p.match_id, p.slot))
    return picks


def is_round_complete(matches: Iterable, round_number: int) -> bool:
    """True once every match in the round is complete."""
    round_matches = [m for m in matches if m.round_number == round_number]
    return bool(round_matches) and all(m.status == MATCH_COMPLETE for m in round_matches)
