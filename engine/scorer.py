"""Match prediction scoring.

Scores one predicted scoreline against the actual result using the pool's
configuration. Only the best tier applies:

    exact score  >  correct winner + goal difference  >  correct winner  >  miss

A predicted draw counts as the "winner" when the match was drawn. Knockout
tiers are multiplied by the stage multiplier. When the match went to penalties
and the pool scores shootouts, the shootout prediction is scored with the same
tiers and added on top, whatever the full-time tier was.
"""

import math

import config
from models.scoring import EXACT, MISS, WINNER, WINNER_GD, PsoInputs, PsoResult, ScoreResult, ScoringConfig


def match_tier(predicted_home: int, predicted_away: int, actual_home: int, actual_away: int) -> str:
    """Best tier a prediction reaches against a result."""
    if predicted_home == actual_home and predicted_away == actual_away:
        return EXACT
    if _sign(predicted_home - predicted_away) != _sign(actual_home - actual_away):
        return MISS
    if predicted_home - predicted_away == actual_home - actual_away:
        return WINNER_GD
    return WINNER


def score_pso(pso: PsoInputs, settings: ScoringConfig) -> PsoResult | None:
    """Shootout sub-score, None if the member gave no shootout prediction."""
    if pso.predicted_home_pso is None or pso.predicted_away_pso is None:
        return None
    tier = match_tier(pso.predicted_home_pso, pso.predicted_away_pso,
                      pso.actual_home_pso, pso.actual_away_pso)
    points = settings.pso_points().get(tier, 0)
    return PsoResult(points=points, tier=tier)


def score_prediction(predicted_home: int, predicted_away: int, actual_home: int, actual_away: int,
                     stage: str, settings: ScoringConfig, pso: PsoInputs | None = None) -> ScoreResult:
    """Score a single prediction.

    Args:
        predicted_home, predicted_away: the member's full-time scoreline
        actual_home, actual_away: the actual full-time scoreline
        stage: "group", "round_32", ..., "final"
        settings: pool scoring configuration
        pso: shootout scores, only when the actual match went to penalties

    Returns:
        ScoreResult with the final points, the pre-multiplier base points,
        the multiplier, the tier and a short label for the UI
    """
    tier = match_tier(predicted_home, predicted_away, actual_home, actual_away)
    multiplier = 1 if stage == config.GROUP_STAGE else settings.multiplier(stage)

    pso_result = None
    if settings.pso_enabled and pso is not None:
        pso_result = score_pso(pso, settings)
    pso_points = pso_result.points if pso_result else 0

    if tier == MISS:
        label = f"Miss FT, +{pso_points} PSO" if pso_points > 0 else "Miss +0"
        return ScoreResult(points=pso_points, base_points=0, multiplier=multiplier,
                           tier=MISS, label=label, pso=pso_result)

    base = settings.tier_points(stage)[tier]
    points = math.floor(base * multiplier) + pso_points
    label = {EXACT: "Exact!", WINNER_GD: "Winner + GD", WINNER: "Winner"}[tier]
    return ScoreResult(points=points, base_points=base, multiplier=multiplier,
                       tier=tier, label=f"{label} +{points}", pso=pso_result)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)
