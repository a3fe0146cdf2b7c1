"""Prediction progress per stage."""

import config
from models.match import Match
from models.prediction import PredictionMap

# "finals" groups the third-place match and the final on one prediction page
FINALS = "finals"


def _stage_matches(matches: list[Match], stage: str) -> list[Match]:
    if stage == FINALS:
        return [m for m in matches if m.stage in (config.THIRD_PLACE, config.FINAL)]
    return [m for m in matches if m.stage == stage]


def count_predicted_matches(matches: list[Match], predictions: PredictionMap, stage: str) -> tuple[int, int]:
    """Returns (predicted, total) for a stage."""
    stage_matches = _stage_matches(matches, stage)
    predicted = sum(1 for m in stage_matches if m.match_id in predictions)
    return predicted, len(stage_matches)


def is_stage_complete(matches: list[Match], predictions: PredictionMap, stage: str) -> bool:
    """Every match predicted, and every knockout draw has a way to pick a winner."""
    predicted, total = count_predicted_matches(matches, predictions, stage)
    if total == 0 or predicted != total:
        return False

    if stage == config.GROUP_STAGE:
        return True

    for m in _stage_matches(matches, stage):
        entry = predictions[m.match_id]
        if entry.is_draw and not entry.has_deciding_pso and entry.winner_team_id is None:
            return False
    return True
