"""
Single elimination bracket generation: seed order, match tree and byes.
"""
import math
from typing import List, Dict, Optional

from knockout.models import (
    BracketSpec, Match, MatchPick,
    MATCH_PENDING, MATCH_ACTIVE, MATCH_COMPLETE,
)


def get_round_name(slots_in_round: int) -> str:
    """Get the name of a round based on the number of slots left in it."""
    if slots_in_round == 2:
        return "Final"
    elif slots_in_round == 4:
        return "Semifinal"
    elif slots_in_round == 8:
        return "Quarterfinal"
    else:
        return f"Round of {slots_in_round}"


def calculate_bracket_size(participant_count: int) -> int:
    """Calculate the bracket size (next power of 2)."""
    if participant_count <= 0:
        return 0
    return 2 ** math.ceil(math.log2(participant_count))


def calculate_total_rounds(bracket_size: int) -> int:
    """Calculate total rounds needed for a bracket."""
    if bracket_size <= 1:
        return 0
    return int(math.log2(bracket_size))


def calculate_bye_count(bracket_size: int, participant_count: int) -> int:
    """Calculate number of byes needed."""
    return bracket_size - participant_count


def get_match_count_for_round(bracket_size: int, round_number: int) -> int:
    """Get number of matches in a specific round."""
    return bracket_size // (2 ** round_number)


def _is_power_of_two(value: int) -> bool:
    return value >= 1 and value & (value - 1) == 0


def generate_seed_order(bracket_size: int) -> List[int]:
    """
    Generate the standard tournament bracket order.
    This ensures that if all higher seeds win, they meet in the proper rounds.

    For 8 slots: [1, 8, 4, 5, 2, 7, 3, 6]
    This gives matchups: 1v8, 4v5, 2v7, 3v6
    Winners: 1v4 side, 2v3 side
    Final: 1v2 (if chalk)
    """
    if bracket_size < 2 or not _is_power_of_two(bracket_size):
        raise ValueError(f"Bracket size must be a power of two >= 2, got {bracket_size}")

    if bracket_size == 2:
        return [1, 2]

    half_size = bracket_size // 2
    upper_half = generate_seed_order(half_size)

    # Lower half mirrors the upper half
    lower_half = [bracket_size + 1 - seed for seed in upper_half]

    result = []
    for u, l in zip(upper_half, lower_half):
        result.extend([u, l])

    return result


def get_seed_pairings(bracket_size: int) -> List[Dict]:
    """
    Round 1 seed pairings for a bracket.

    Returns list of {'position', 'seed1', 'seed2'} dicts, seed1 being the
    stronger (numerically lower) seed.
    """
    order = generate_seed_order(bracket_size)
    pairings = []
    for i in range(0, len(order), 2):
        pairings.append({
            'position': i // 2 + 1,
            'seed1': min(order[i], order[i + 1]),
            'seed2': max(order[i], order[i + 1]),
        })
    return pairings


def assign_participants_to_matches(bracket_size: int, participant_count: int) -> List[Dict]:
    """
    Map real participants onto round 1 pairings.

    Seeds above participant_count are phantoms: their pairing becomes a bye
    for seed1 (seed2 is None). Byes therefore go to the top seeds.
    """
    assignments = []
    for pairing in get_seed_pairings(bracket_size):
        is_bye = pairing['seed2'] > participant_count
        assignments.append({
            'position': pairing['position'],
            'seed1': pairing['seed1'],
            'seed2': None if is_bye else pairing['seed2'],
            'is_bye': is_bye,
        })
    return assignments


def build_match_tree(group_size: int, total_rounds: int) -> List[Match]:
    """
    Build every match of a knockout tree with qualifies_to links.

    Round r holds group_size^(total_rounds - r) matches. Ids run
    sequentially round by round; a match at position p in round r feeds
    the match at ceil(p / group_size) in round r + 1.
    """
    matches = []
    round_start_ids = {}
    match_id = 1

    for round_number in range(1, total_rounds + 1):
        round_start_ids[round_number] = match_id
        match_count = group_size ** (total_rounds - round_number)
        status = MATCH_ACTIVE if round_number == 1 else MATCH_PENDING
        for position in range(1, match_count + 1):
            matches.append(Match(match_id, round_number, position, status=status))
            match_id += 1

    for match in matches:
        if match.round_number < total_rounds:
            next_position = math.ceil(match.position_in_round / group_size)
            match.qualifies_to_match_id = round_start_ids[match.round_number + 1] + next_position - 1

    return matches


def generate_bracket_structure(bracket_size: int) -> List[Match]:
    """Generate the full match tree for a binary bracket (bracket_size - 1 matches)."""
    if bracket_size < 2 or not _is_power_of_two(bracket_size):
        raise ValueError(f"Bracket size must be a power of two >= 2, got {bracket_size}")
    return build_match_tree(2, calculate_total_rounds(bracket_size))


def get_next_round_slot(position_in_round: int, group_size: int = 2) -> int:
    """
    Slot a winner takes in the next round's match.
    For 1v1 brackets: odd positions -> slot 1, even positions -> slot 2.
    """
    return (position_in_round - 1) % group_size + 1


def build_bracket(roster: List, bracket_size: Optional[int] = None) -> Dict:
    """
    Build a complete binary bracket from an ordered roster.

    The roster is ordered by league rank; seed = index + 1. Each entry may
    be a StandingEntry or anything with an `entry` attribute.

    Returns dict with:
    - 'spec': BracketSpec
    - 'matches': list of Match (bye matches already complete)
    - 'picks': list of MatchPick for round 1, plus bye winners already
      advanced into round 2
    - 'assignments': round 1 seed assignments
    """
    participant_count = len(roster)
    if participant_count < 2:
        raise ValueError(f"A bracket needs at least 2 participants, got {participant_count}")

    if bracket_size is None:
        bracket_size = calculate_bracket_size(participant_count)
    elif bracket_size < participant_count:
        raise ValueError(f"Bracket size {bracket_size} cannot hold {participant_count} participants")

    total_rounds = calculate_total_rounds(bracket_size)
    spec = BracketSpec(
        participant_count=participant_count,
        group_size=2,
        total_slots=bracket_size,
        total_rounds=total_rounds,
        bye_count=calculate_bye_count(bracket_size, participant_count),
        groups_per_round=[get_match_count_for_round(bracket_size, r) for r in range(1, total_rounds + 1)],
    )

    matches = generate_bracket_structure(bracket_size)
    assignments = assign_participants_to_matches(bracket_size, participant_count)

    seed_to_entry = {index + 1: member.entry for index, member in enumerate(roster)}
    first_round = {m.position_in_round: m for m in matches if m.round_number == 1}
    matches_by_id = {m.match_id: m for m in matches}

    picks = []
    for assignment in assignments:
        match = first_round[assignment['position']]
        entry1 = seed_to_entry[assignment['seed1']]
        picks.append(MatchPick(match.match_id, entry1, slot=1, seed=assignment['seed1']))

        if assignment['seed2'] is not None:
            picks.append(MatchPick(match.match_id, seed_to_entry[assignment['seed2']], slot=2,
                                   seed=assignment['seed2']))
            continue

        # Bye: seed1 wins now and moves straight into round 2
        match.is_bye = True
        match.status = MATCH_COMPLETE
        match.winner_id = entry1
        if match.qualifies_to_match_id is not None:
            next_match = matches_by_id[match.qualifies_to_match_id]
            picks.append(MatchPick(next_match.match_id, entry1,
                                   slot=get_next_round_slot(match.position_in_round),
                                   seed=assignment['seed1']))

    return {
        'spec': spec,
        'matches': matches,
        'picks': picks,
        'assignments': assignments,
    }
