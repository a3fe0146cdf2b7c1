"""
Unit tests for full bracket resolution.
"""
import dataclasses

import pytest

from conftest import by_number
from engine.errors import StructuralError
from engine.resolver import index_schedule, resolve_bracket
from models.bracket import Decision
from models.match import ConcreteTeam, LoserOf, Match, WinnerOf
from models.prediction import ScoreEntry


def team_ids(pairing):
    return (pairing.home.team_id if pairing.home else None,
            pairing.away.team_id if pairing.away else None)


class TestResolveBracket:
    """Tests for the favourites bracket: better seeds and home sides always win."""

    def test_round_of_32_pairings(self, schedule, teams, favourites):
        bracket = resolve_bracket(schedule, favourites, teams)
        assert team_ids(bracket.pairing(73)) == ("A2", "B2")
        assert team_ids(bracket.pairing(74)) == ("C1", "F2")
        assert team_ids(bracket.pairing(75)) == ("E1", "A3")
        assert team_ids(bracket.pairing(88)) == ("K1", "D3")
        assert all(bracket.pairing(n).is_complete for n in range(73, 105))

    def test_annex_c_option(self, schedule, teams, favourites):
        bracket = resolve_bracket(schedule, favourites, teams)
        assert bracket.qualifying_third_groups == "ABCDEFGH"
        assert bracket.annex_c_option == 1

    def test_cascade_to_podium(self, schedule, teams, favourites):
        bracket = resolve_bracket(schedule, favourites, teams)
        assert team_ids(bracket.pairing(101)) == ("C1", "H1")
        assert team_ids(bracket.pairing(102)) == ("F1", "D2")
        assert team_ids(bracket.pairing(103)) == ("H1", "D2")
        assert bracket.champion.team_id == "C1"
        assert bracket.runner_up.team_id == "F1"
        assert bracket.third_place.team_id == "H1"
        assert bracket.is_complete()

    def test_qualified_teams(self, schedule, teams, favourites):
        bracket = resolve_bracket(schedule, favourites, teams)
        assert len(bracket.qualified_team_ids) == 32
        assert "A3" in bracket.qualified_team_ids
        assert "L3" not in bracket.qualified_team_ids
        assert "A4" not in bracket.qualified_team_ids

    def test_idempotent(self, schedule, teams, favourites):
        first = resolve_bracket(schedule, favourites, teams)
        second = resolve_bracket(schedule, favourites, teams)
        assert first == second

    def test_inputs_unchanged(self, schedule, teams, favourites):
        before = dict(favourites)
        resolve_bracket(schedule, favourites, teams)
        assert favourites == before

    def test_no_predictions(self, schedule, teams):
        """Group tables still sort by strength, but nothing is decided."""
        bracket = resolve_bracket(schedule, {}, teams)
        assert team_ids(bracket.pairing(74)) == ("C1", "F2")
        assert bracket.outcomes[74].decision is Decision.UNDETERMINED
        assert bracket.pairing(89).home is None
        assert bracket.champion is None
        assert not bracket.is_complete()

    def test_draw_without_decider_propagates(self, schedule, teams, favourites):
        predictions = dict(favourites)
        predictions["M074"] = ScoreEntry(1, 1)
        bracket = resolve_bracket(schedule, predictions, teams)
        assert bracket.pairing(89).home is None
        assert bracket.pairing(89).away.team_id == "E2"
        assert bracket.champion is None
        assert bracket.runner_up is None
        assert bracket.third_place is None
        assert bracket.pairing(91).is_complete

    def test_shootout_decides(self, schedule, teams, favourites):
        predictions = dict(favourites)
        predictions["M074"] = ScoreEntry(1, 1, home_pso=3, away_pso=4)
        bracket = resolve_bracket(schedule, predictions, teams)
        assert bracket.outcomes[74].decision is Decision.BY_PSO
        assert bracket.pairing(89).home.team_id == "F2"

    def test_explicit_pick_decides(self, schedule, teams, favourites):
        predictions = dict(favourites)
        predictions["M074"] = ScoreEntry(0, 0, winner_team_id="F2")
        bracket = resolve_bracket(schedule, predictions, teams)
        assert bracket.outcomes[74].decision is Decision.BY_EXPLICIT_PICK
        assert bracket.winner_of(74).team_id == "F2"

    def test_pick_for_team_not_in_match_ignored(self, schedule, teams, favourites):
        predictions = dict(favourites)
        predictions["M074"] = ScoreEntry(2, 2, winner_team_id="A1")
        bracket = resolve_bracket(schedule, predictions, teams)
        assert bracket.outcomes[74].decision is Decision.UNDETERMINED

    def test_incomplete_group_still_seeds(self, schedule, teams, favourites):
        predictions = {k: v for k, v in favourites.items() if k != "M001"}
        bracket = resolve_bracket(schedule, predictions, teams)
        # Seeding follows the partial tables
        assert bracket.annex_c_option == 1
        assert bracket.pairing(79).home.team_id == "A1"

    def test_group_winner_helpers(self, schedule, teams, favourites):
        bracket = resolve_bracket(schedule, favourites, teams)
        assert bracket.group_winner("B").team_id == "B1"
        assert bracket.group_runner_up("B").team_id == "B2"


class TestStructuralErrors:
    """Malformed schedules fail loudly."""

    def test_duplicate_match_number(self, schedule):
        duplicate = dataclasses.replace(by_number(schedule, 104), match_id="X104")
        with pytest.raises(StructuralError, match="Duplicate"):
            index_schedule(schedule + [duplicate])

    def test_reference_to_unknown_match(self, schedule):
        broken = [m for m in schedule if m.match_number != 74]
        with pytest.raises(StructuralError, match="unknown match"):
            index_schedule(broken)

    def test_reference_to_later_match(self, schedule):
        bad = dataclasses.replace(by_number(schedule, 89), home=WinnerOf(90))
        matches = [bad if m.match_number == 89 else m for m in schedule]
        with pytest.raises(StructuralError, match="later match"):
            index_schedule(matches)

    def test_reference_to_group_match(self, schedule):
        bad = dataclasses.replace(by_number(schedule, 103), home=LoserOf(5))
        matches = [bad if m.match_number == 103 else m for m in schedule]
        with pytest.raises(StructuralError, match="group match"):
            index_schedule(matches)

    def test_unknown_concrete_team(self, schedule, teams):
        bad = dataclasses.replace(by_number(schedule, 73), home=ConcreteTeam("ZZ9"))
        matches = [bad if m.match_number == 73 else m for m in schedule]
        with pytest.raises(StructuralError, match="unknown team"):
            resolve_bracket(matches, {}, teams)

    def test_missing_annex_row(self, schedule, teams, favourites):
        with pytest.raises(StructuralError, match="No Annex C entry"):
            resolve_bracket(schedule, favourites, teams, annex_table={})

    def test_unknown_stage_rejected(self):
        with pytest.raises(ValueError):
            Match(match_id="M999", match_number=999, stage="play_off",
                  home=ConcreteTeam("A1"), away=ConcreteTeam("A2"))
