"""Pool scoring configuration and scoring results."""

from __future__ import annotations

from dataclasses import dataclass, fields

import config

# Outcome tiers, best first
EXACT = "exact"
WINNER_GD = "winner_gd"
WINNER = "winner"
MISS = "miss"

_MULTIPLIER_FIELDS = {
    config.ROUND_16: "round_16_multiplier",
    config.QUARTER_FINAL: "quarter_final_multiplier",
    config.SEMI_FINAL: "semi_final_multiplier",
    config.THIRD_PLACE: "third_place_multiplier",
    config.FINAL: "final_multiplier",
}


@dataclass(frozen=True)
class ScoringConfig:
    """Per-pool point values.

    Bonus values of None mean the category is switched off for the pool.
    """
    # Group stage
    group_exact_score: int = config.DEFAULT_GROUP_POINTS[EXACT]
    group_correct_difference: int = config.DEFAULT_GROUP_POINTS[WINNER_GD]
    group_correct_result: int = config.DEFAULT_GROUP_POINTS[WINNER]
    # Knockout stage (before multiplier)
    knockout_exact_score: int = config.DEFAULT_KNOCKOUT_POINTS[EXACT]
    knockout_correct_difference: int = config.DEFAULT_KNOCKOUT_POINTS[WINNER_GD]
    knockout_correct_result: int = config.DEFAULT_KNOCKOUT_POINTS[WINNER]
    # Stage multipliers (Round of 32 is always 1x)
    round_16_multiplier: float = 1
    quarter_final_multiplier: float = 1
    semi_final_multiplier: float = 1
    third_place_multiplier: float = 1
    final_multiplier: float = 1
    # Penalty shootout
    pso_enabled: bool = False
    pso_exact_score: int = 0
    pso_correct_difference: int = 0
    pso_correct_result: int = 0
    # Bonus: group standings
    bonus_group_winner_and_runnerup: int | None = config.DEFAULT_BONUS_POINTS["group_winner_and_runnerup"]
    bonus_group_winner_only: int | None = config.DEFAULT_BONUS_POINTS["group_winner_only"]
    bonus_group_runnerup_only: int | None = config.DEFAULT_BONUS_POINTS["group_runnerup_only"]
    bonus_both_qualify_swapped: int | None = config.DEFAULT_BONUS_POINTS["both_qualify_swapped"]
    bonus_one_qualifies_wrong_position: int | None = config.DEFAULT_BONUS_POINTS["one_qualifies_wrong_position"]
    # Bonus: overall qualification
    bonus_all_qualified: int | None = config.DEFAULT_BONUS_POINTS["all_qualified"]
    bonus_qualified_75pct: int | None = config.DEFAULT_BONUS_POINTS["qualified_75pct"]
    bonus_qualified_50pct: int | None = config.DEFAULT_BONUS_POINTS["qualified_50pct"]
    # Bonus: bracket
    bonus_correct_bracket_pairing: int | None = config.DEFAULT_BONUS_POINTS["correct_bracket_pairing"]
    bonus_match_winner_correct: int | None = config.DEFAULT_BONUS_POINTS["match_winner_correct"]
    # Bonus: podium
    bonus_champion_correct: int | None = config.DEFAULT_BONUS_POINTS["champion_correct"]
    bonus_second_place_correct: int | None = config.DEFAULT_BONUS_POINTS["second_place_correct"]
    bonus_third_place_correct: int | None = config.DEFAULT_BONUS_POINTS["third_place_correct"]

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def tier_points(self, stage: str) -> dict[str, int]:
        """Base points per tier for a stage."""
        if stage == config.GROUP_STAGE:
            return {
                EXACT: self.group_exact_score,
                WINNER_GD: self.group_correct_difference,
                WINNER: self.group_correct_result,
            }
        return {
            EXACT: self.knockout_exact_score,
            WINNER_GD: self.knockout_correct_difference,
            WINNER: self.knockout_correct_result,
        }

    def pso_points(self) -> dict[str, int]:
        return {
            EXACT: self.pso_exact_score,
            WINNER_GD: self.pso_correct_difference,
            WINNER: self.pso_correct_result,
        }

    def multiplier(self, stage: str) -> float:
        """Stage multiplier; unset or zero multipliers count as 1x."""
        name = _MULTIPLIER_FIELDS.get(stage)
        if name is None:
            return 1
        return getattr(self, name) or 1

    def bonus(self, name: str) -> int:
        """Points for a bonus category, 0 if the pool has it switched off."""
        value = getattr(self, f"bonus_{name}")
        return value or 0


@dataclass(frozen=True)
class PsoInputs:
    actual_home_pso: int
    actual_away_pso: int
    predicted_home_pso: int | None = None
    predicted_away_pso: int | None = None


@dataclass(frozen=True)
class PsoResult:
    points: int
    tier: str


@dataclass(frozen=True)
class ScoreResult:
    points: int        # final total, including any PSO points
    base_points: int   # tier points before the stage multiplier
    multiplier: float
    tier: str
    label: str
    pso: PsoResult | None = None


@dataclass(frozen=True)
class BonusAward:
    member_id: str
    bonus_type: str
    category: str  # group_standings | qualification | bracket | tournament
    points: int
    description: str
    group_letter: str | None = None
    match_number: int | None = None
    match_id: str | None = None


@dataclass(frozen=True)
class TournamentAwards:
    champion_team_id: str | None = None
    runner_up_team_id: str | None = None
    third_place_team_id: str | None = None
