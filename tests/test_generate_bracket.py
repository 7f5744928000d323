"""
Tests for the generate_bracket command line script.
"""
import pytest
import sys
import os
import yaml
from unittest.mock import patch

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import generate_bracket
from knockout.exceptions import LeagueNotFoundError


@pytest.fixture
def roster_file(tmp_path):
    rows = [{'entry': 1000 + i, 'rank': i, 'entry_name': f'Team {i}'} for i in range(6, 0, -1)]
    path = tmp_path / 'roster.yaml'
    path.write_text(yaml.dump(rows))
    return str(path)


class TestLoadRoster:

    def test_sorted_by_rank(self, roster_file):
        roster = generate_bracket.load_roster(roster_file)
        assert [member.rank for member in roster] == [1, 2, 3, 4, 5, 6]


class TestBracketCommand:

    def test_binary_preview(self, roster_file, capsys):
        assert generate_bracket.main(['bracket', roster_file]) == 0
        out = capsys.readouterr().out
        assert "6 participants, 8 slots, 3 rounds, 2 byes" in out
        assert "# Quarterfinal" in out
        assert "M1: (1) Team 1 - BYE" in out
        assert "M2: (4) Team 4 vs (5) Team 5" in out

    def test_nway_preview(self, roster_file, capsys):
        assert generate_bracket.main(['bracket', roster_file, '--group-size', '3']) == 0
        out = capsys.readouterr().out
        assert "9 slots" in out
        assert "G1: Team 1 vs Team 6 vs BYE" in out

    def test_too_few_participants(self, tmp_path, capsys):
        path = tmp_path / 'roster.yaml'
        path.write_text(yaml.dump([{'entry': 1, 'rank': 1}]))
        assert generate_bracket.main(['bracket', str(path)]) == 1
        assert "Error" in capsys.readouterr().err


class TestCountCommand:

    def test_count(self, capsys):
        with patch('generate_bracket.get_league_participant_count', return_value=36747):
            assert generate_bracket.main(['count', '314']) == 0
        assert "League 314: 36747 participants (mega)" in capsys.readouterr().out

    def test_league_not_found(self, capsys):
        with patch('generate_bracket.get_league_participant_count', side_effect=LeagueNotFoundError(5)):
            assert generate_bracket.main(['count', '5']) == 1
        assert "League 5 not found" in capsys.readouterr().err
