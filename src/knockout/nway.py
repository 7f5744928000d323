"""
Bracket structure for tournaments with N managers per match.
"""
import logging
import math
from typing import List, Dict

from knockout.models import BracketSpec, Match
from knockout.seeding import build_match_tree

logger = logging.getLogger(__name__)

# Absorbs float error when the count is an exact power of the group size,
# e.g. log(27) / log(3) == 3.0000000000000004
ROUNDS_EPSILON = 1e-10


def calculate_nway_bracket(participant_count: int, group_size: int) -> BracketSpec:
    """
    Calculate bracket structure for N-way matches.

    Finds the minimum rounds such that group_size^rounds >= participant_count.
    Byes fill the gap; round 1 has the most groups and the final has one.
    """
    if group_size < 2:
        raise ValueError(f"Group size must be at least 2, got {group_size}")
    if participant_count < 2:
        raise ValueError(f"A bracket needs at least 2 participants, got {participant_count}")

    raw_rounds = math.log(participant_count) / math.log(group_size)
    rounds = math.ceil(raw_rounds - ROUNDS_EPSILON)
    total_slots = group_size ** rounds

    return BracketSpec(
        participant_count=participant_count,
        group_size=group_size,
        total_slots=total_slots,
        total_rounds=rounds,
        bye_count=total_slots - participant_count,
        groups_per_round=[group_size ** (rounds - r) for r in range(1, rounds + 1)],
    )


def distribute_byes_across_groups(group_count: int, bye_count: int, group_size: int) -> Dict:
    """
    Distribute byes across round 1 groups.

    Byes go out in passes of at most one per group, for at most
    group_size - 1 passes, so they are spread evenly before any group
    gets a second one.

    Returns dict with:
    - 'groups_with_one_bye': groups that received at least the first-pass bye
    - 'groups_with_two_byes': groups that received a second bye
    - 'full_groups': groups with no byes
    - 'auto_advance_count': groups left with a single real player
      (only reported for group_size 3)
    - 'byes_per_pass': byes handed out in each pass
    """
    max_passes = group_size - 1
    byes_per_pass = []
    remaining = bye_count
    while remaining > 0 and len(byes_per_pass) < max_passes:
        given = min(remaining, group_count)
        byes_per_pass.append(given)
        remaining -= given

    if remaining > 0:
        logger.warning(f"{remaining} byes left over after {max_passes} passes across {group_count} groups")

    first_pass = byes_per_pass[0] if byes_per_pass else 0
    second_pass = byes_per_pass[1] if len(byes_per_pass) > 1 else 0

    # A group with group_size - 1 byes has one real player. Only counted
    # for groups of 3; larger groups would need the deeper passes too.
    if group_size == 3:
        auto_advance_count = second_pass
    else:
        auto_advance_count = 0
        if group_size > 3 and bye_count > 0:
            logger.debug(f"Auto-advance not reported for group size {group_size}")

    return {
        'groups_with_one_bye': first_pass,
        'groups_with_two_byes': second_pass,
        'full_groups': group_count - first_pass,
        'auto_advance_count': auto_advance_count,
        'byes_per_pass': byes_per_pass,
    }


def generate_nway_bracket_structure(group_size: int, rounds: int) -> List[Match]:
    """
    Generate all matches for an N-way bracket with qualifies_to links.
    Each block of group_size matches in round r feeds one match in round r + 1.
    """
    if group_size < 2:
        raise ValueError(f"Group size must be at least 2, got {group_size}")
    if rounds < 1:
        raise ValueError(f"Bracket needs at least one round, got {rounds}")
    return build_match_tree(group_size, rounds)


def assign_participants_to_nway_matches(group_size: int, total_slots: int, participant_count: int) -> List[Dict]:
    """
    Assign seeds to round 1 groups with a snake draft.

    Snake draft for 4 groups of 4:
    Row 1: G1<-1, G2<-2, G3<-3, G4<-4
    Row 2: G4<-5, G3<-6, G2<-7, G1<-8
    Row 3: G1<-9, G2<-10, G3<-11, G4<-12
    Row 4: G4<-13, G3<-14, G2<-15, G1<-16

    Result: G1=[1,8,9,16], G2=[2,7,10,15], G3=[3,6,11,14], G4=[4,5,12,13]

    Seeds above participant_count are byes (None). A group with at most one
    real player is flagged is_bye and auto-advances.
    """
    group_count = total_slots // group_size
    groups = [[] for _ in range(group_count)]

    for seed in range(1, total_slots + 1):
        row = (seed - 1) // group_count
        pos_in_row = (seed - 1) % group_count
        group_index = pos_in_row if row % 2 == 0 else group_count - 1 - pos_in_row
        groups[group_index].append(seed if seed <= participant_count else None)

    assignments = []
    for index, seeds in enumerate(groups):
        real_players = sum(1 for s in seeds if s is not None)
        assignments.append({
            'position': index + 1,
            'seeds': seeds,
            'is_bye': real_players <= 1,
        })
    return assignments
