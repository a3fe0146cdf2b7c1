"""Score entries (predictions or actual results) and conduct records."""

from dataclasses import dataclass

import config
from models.match import Match


@dataclass(frozen=True)
class ScoreEntry:
    """A home/away score for one match.

    Used for a member's prediction and, symmetrically, for an actual result.
    For a drawn knockout match the winner comes from the penalty shootout
    score, or from an explicit winner pick when no shootout score was given.
    """
    home: int
    away: int
    home_pso: int | None = None
    away_pso: int | None = None
    winner_team_id: str | None = None

    def __post_init__(self):
        if self.home is None or self.away is None:
            raise ValueError("A score entry needs both a home and an away score")

    @property
    def is_draw(self) -> bool:
        return self.home == self.away

    @property
    def has_deciding_pso(self) -> bool:
        return (self.home_pso is not None and self.away_pso is not None
                and self.home_pso != self.away_pso)


# match_id -> ScoreEntry
PredictionMap = dict[str, ScoreEntry]


@dataclass(frozen=True)
class ConductRecord:
    """Disciplinary card counts for one team in one match."""
    match_id: str
    team_id: str
    yellow_cards: int = 0
    indirect_red_cards: int = 0
    direct_red_cards: int = 0
    yellow_direct_red_cards: int = 0

    @property
    def fair_play_score(self) -> int:
        """Sum of deductions; 0 is a clean record, more negative is worse."""
        return sum(getattr(self, field) * weight
                   for field, weight in config.FAIR_PLAY_DEDUCTIONS.items())


def build_actual_results(matches: list[Match]) -> PredictionMap:
    """Turn completed matches into the same shape as a member's predictions.

    Only completed matches with a full-time score are included, so running the
    bracket resolver on the result gives "what actually happened so far".
    """
    results: PredictionMap = {}
    for m in matches:
        if not m.has_result:
            continue
        if m.is_group_stage:
            results[m.match_id] = ScoreEntry(home=m.home_score, away=m.away_score)
        else:
            results[m.match_id] = ScoreEntry(
                home=m.home_score,
                away=m.away_score,
                home_pso=m.home_pso,
                away_pso=m.away_pso,
                winner_team_id=m.winner_team_id,
            )
    return results
