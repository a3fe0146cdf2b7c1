"""
Unit tests for bonus points.
"""
import dataclasses

import pytest

from engine.bonus import calculate_all_bonus_points, group_standings_award, qualification_bonuses
from engine.resolver import resolve_bracket
from models.prediction import ScoreEntry, build_actual_results
from models.scoring import ScoringConfig, TournamentAwards
from models.standing import GroupStanding
from models.team import Team


def by_type(awards):
    counts = {}
    for a in awards:
        counts[a.bonus_type] = counts.get(a.bonus_type, 0) + 1
    return counts


def table(*team_ids):
    return [GroupStanding(team=Team(team_id=t, name=t, country_code=t, group_letter="A", strength=0))
            for t in team_ids]


class TestAllBonuses:
    """A member who predicted the favourites bracket, scored against various result states."""

    def test_perfect_member(self, completed_schedule, teams, favourites):
        awards = calculate_all_bonus_points("alice", favourites, completed_schedule, teams, [], ScoringConfig())
        assert by_type(awards) == {
            "group_winner_and_runnerup": 12,
            "all_qualified": 1,
            "correct_bracket_pairing": 16,
            "match_winner_correct": 32,
            "champion_correct": 1,
            "second_place_correct": 1,
            "third_place_correct": 1,
        }
        assert sum(a.points for a in awards) == 4925

    def test_wrong_explicit_pick(self, completed_schedule, teams, favourites):
        """Picking F2 through a predicted draw costs every win C1 went on to collect."""
        predictions = dict(favourites)
        predictions["M074"] = ScoreEntry(0, 0, winner_team_id="F2")
        awards = calculate_all_bonus_points("bob", predictions, completed_schedule, teams, [], ScoringConfig())
        counts = by_type(awards)
        assert counts["match_winner_correct"] == 27
        assert counts["correct_bracket_pairing"] == 16
        assert "champion_correct" not in counts
        assert counts["second_place_correct"] == 1
        assert counts["third_place_correct"] == 1
        missed = {a.match_number for a in awards if a.bonus_type == "match_winner_correct"}
        assert {74, 89, 97, 101, 104}.isdisjoint(missed)

    def test_group_stage_only(self, group_stage_done, teams, favourites):
        awards = calculate_all_bonus_points("alice", favourites, group_stage_done, teams, [], ScoringConfig())
        counts = by_type(awards)
        assert counts == {"group_winner_and_runnerup": 12, "all_qualified": 1, "correct_bracket_pairing": 16}
        assert sum(a.points for a in awards) == 1800 + 75 + 400

    def test_nothing_played(self, schedule, teams, favourites):
        assert calculate_all_bonus_points("alice", favourites, schedule, teams, [], ScoringConfig()) == []

    def test_switched_off_categories(self, completed_schedule, teams, favourites):
        settings = ScoringConfig(bonus_match_winner_correct=None, bonus_champion_correct=0)
        awards = calculate_all_bonus_points("alice", favourites, completed_schedule, teams, [], settings)
        counts = by_type(awards)
        assert "match_winner_correct" not in counts
        assert "champion_correct" not in counts
        assert counts["second_place_correct"] == 1

    def test_official_podium_overrides(self, completed_schedule, teams, favourites):
        official = TournamentAwards(champion_team_id="F1", runner_up_team_id="C1", third_place_team_id="H1")
        awards = calculate_all_bonus_points("alice", favourites, completed_schedule, teams, [],
                                            ScoringConfig(), official)
        counts = by_type(awards)
        assert "champion_correct" not in counts
        assert "second_place_correct" not in counts
        assert counts["third_place_correct"] == 1

    def test_awards_carry_match_reference(self, completed_schedule, teams, favourites):
        awards = calculate_all_bonus_points("alice", favourites, completed_schedule, teams, [], ScoringConfig())
        final = [a for a in awards if a.bonus_type == "match_winner_correct" and a.match_number == 104]
        assert final[0].match_id == "M104"
        assert "Team C1" in final[0].description
        assert all(a.member_id == "alice" for a in awards)


class TestGroupStandingsAward:
    """Only the best applicable award, per group."""

    @pytest.mark.parametrize("predicted, bonus_type, points", [
        (("A1", "A2", "A3", "A4"), "group_winner_and_runnerup", 150),
        (("A2", "A1", "A3", "A4"), "both_qualify_swapped", 75),
        (("A1", "A3", "A2", "A4"), "group_winner_only", 100),
        (("A3", "A2", "A1", "A4"), "group_runnerup_only", 50),
        (("A3", "A1", "A2", "A4"), "one_qualifies_wrong_position", 25),
    ])
    def test_tiers(self, predicted, bonus_type, points):
        award = group_standings_award("alice", "A", table(*predicted), table("A1", "A2", "A3", "A4"),
                                      ScoringConfig())
        assert award.bonus_type == bonus_type
        assert award.points == points
        assert award.category == "group_standings"
        assert award.group_letter == "A"

    def test_no_qualifier_right(self):
        award = group_standings_award("alice", "A", table("A3", "A4", "A1", "A2"),
                                      table("A1", "A2", "A3", "A4"), ScoringConfig())
        assert award is None

    def test_switched_off(self):
        settings = ScoringConfig(bonus_group_winner_and_runnerup=None)
        award = group_standings_award("alice", "A", table("A1", "A2"), table("A1", "A2"), settings)
        assert award is None


class TestQualificationTiers:

    def _bonus(self, matches, teams, predictions):
        actual = resolve_bracket(matches, build_actual_results(matches), teams)
        predicted = dataclasses.replace(actual, qualified_team_ids=frozenset(predictions))
        return qualification_bonuses("alice", matches, predicted, actual, ScoringConfig())

    def test_thresholds(self, group_stage_done, teams):
        actual = sorted(resolve_bracket(group_stage_done, build_actual_results(group_stage_done),
                                        teams).qualified_team_ids)
        assert self._bonus(group_stage_done, teams, actual)[0].bonus_type == "all_qualified"
        assert self._bonus(group_stage_done, teams, actual[:24])[0].bonus_type == "qualified_75pct"
        assert self._bonus(group_stage_done, teams, actual[:23])[0].bonus_type == "qualified_50pct"
        assert self._bonus(group_stage_done, teams, actual[:16])[0].points == 25
        assert self._bonus(group_stage_done, teams, actual[:15]) == []

    def test_waits_for_group_stage(self, schedule, teams):
        assert self._bonus(schedule, teams, []) == []
