#!/usr/bin/env python3
"""
Knockout bracket preview and league sizing.

Usage:
    python src/generate_bracket.py bracket data/roster.yaml
    python src/generate_bracket.py bracket data/roster.yaml --group-size 3
    python src/generate_bracket.py count 314 --config config.yaml

The roster file is a YAML list of standings rows ordered by league rank:
    - {entry: 1001, rank: 1, entry_name: Eagles}
    - {entry: 1002, rank: 2, entry_name: Hawks}
"""
import argparse
import logging
import sys

import yaml

from knockout.config import load_config
from knockout.exceptions import KnockoutError
from knockout.league_count import get_league_participant_count, get_tournament_size_tier
from knockout.models import StandingEntry
from knockout.nway import (
    calculate_nway_bracket,
    distribute_byes_across_groups,
    assign_participants_to_nway_matches,
)
from knockout.seeding import build_bracket, get_round_name


def load_roster(file_path):
    with open(file_path, mode='r', encoding='utf-8') as file:
        rows = yaml.safe_load(file) or []
    roster = [StandingEntry.from_json(row) for row in rows]
    roster.sort(key=lambda member: member.rank)
    return roster


def _label(member):
    return member.entry_name or str(member.entry)


def print_binary_bracket(roster):
    bracket = build_bracket(roster)
    spec = bracket['spec']
    print(f"{spec.participant_count} participants, {spec.total_slots} slots, "
          f"{spec.total_rounds} rounds, {spec.bye_count} byes")

    entry_names = {member.entry: _label(member) for member in roster}
    print(f"# {get_round_name(spec.total_slots)}")
    first_round_ids = {m.match_id for m in bracket['matches'] if m.round_number == 1}
    picks_by_match = {}
    for pick in bracket['picks']:
        if pick.match_id in first_round_ids:
            picks_by_match.setdefault(pick.match_id, []).append(pick)

    for match in bracket['matches']:
        if match.round_number != 1:
            continue
        picks = sorted(picks_by_match.get(match.match_id, []), key=lambda p: p.slot)
        if match.is_bye:
            print(f"M{match.match_id}: ({picks[0].seed}) {entry_names[picks[0].entry_id]} - BYE")
        else:
            print(f"M{match.match_id}: ({picks[0].seed}) {entry_names[picks[0].entry_id]} vs "
                  f"({picks[1].seed}) {entry_names[picks[1].entry_id]}")


def print_nway_bracket(roster, group_size):
    spec = calculate_nway_bracket(len(roster), group_size)
    print(f"{spec.participant_count} participants, {spec.total_slots} slots, "
          f"{spec.total_rounds} rounds, {spec.bye_count} byes, groups per round {spec.groups_per_round}")

    distribution = distribute_byes_across_groups(spec.groups_per_round[0], spec.bye_count, group_size)
    print(f"Groups with byes: {distribution['groups_with_one_bye']}, "
          f"auto-advance: {distribution['auto_advance_count']}")

    seed_names = {index + 1: _label(member) for index, member in enumerate(roster)}
    for group in assign_participants_to_nway_matches(group_size, spec.total_slots, spec.participant_count):
        names = [seed_names[s] if s is not None else 'BYE' for s in group['seeds']]
        suffix = " (auto-advance)" if group['is_bye'] else ""
        print(f"G{group['position']}: {' vs '.join(names)}{suffix}")


def main(argv=None):
    parser = argparse.ArgumentParser(description='Knockout bracket tools')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    bracket_parser = subparsers.add_parser('bracket', help='Preview a bracket for a roster file')
    bracket_parser.add_argument('roster', help='YAML roster ordered by rank')
    bracket_parser.add_argument('--group-size', type=int, default=2, help='Managers per match')

    count_parser = subparsers.add_parser('count', help='Count the participants of a league')
    count_parser.add_argument('league_id', type=int)
    count_parser.add_argument('--config', help='YAML config file')

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    try:
        if args.command == 'bracket':
            roster = load_roster(args.roster)
            if args.group_size == 2:
                print_binary_bracket(roster)
            else:
                print_nway_bracket(roster, args.group_size)
        else:
            config = load_config(args.config)
            count = get_league_participant_count(args.league_id, config=config)
            print(f"League {args.league_id}: {count} participants ({get_tournament_size_tier(count, config)})")
    except (KnockoutError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
