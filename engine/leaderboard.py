"""Pool leaderboard.

A member's total is the sum of their per-match prediction points over all
completed matches plus their bonus awards.
"""

from dataclasses import dataclass, field

from engine.annex_c import AnnexCRow
from engine.bonus import calculate_all_bonus_points
from engine.scorer import score_prediction
from models.match import Match
from models.prediction import ConductRecord, PredictionMap
from models.scoring import BonusAward, PsoInputs, ScoreResult, ScoringConfig, TournamentAwards
from models.team import Team


@dataclass
class MemberScore:
    member_id: str
    match_scores: dict[int, ScoreResult] = field(default_factory=dict)  # match number -> result
    bonuses: list[BonusAward] = field(default_factory=list)
    rank: int = 0

    @property
    def match_points(self) -> int:
        return sum(r.points for r in self.match_scores.values())

    @property
    def bonus_points(self) -> int:
        return sum(b.points for b in self.bonuses)

    @property
    def total(self) -> int:
        return self.match_points + self.bonus_points


def score_member_matches(predictions: PredictionMap, matches: list[Match],
                         settings: ScoringConfig) -> dict[int, ScoreResult]:
    """Score every completed match the member predicted.

    Returns:
        {match_number: ScoreResult}
    """
    results = {}
    for match in matches:
        entry = predictions.get(match.match_id)
        if entry is None or not match.has_result:
            continue
        pso = None
        if match.is_knockout and match.went_to_penalties:
            pso = PsoInputs(
                actual_home_pso=match.home_pso,
                actual_away_pso=match.away_pso,
                predicted_home_pso=entry.home_pso,
                predicted_away_pso=entry.away_pso,
            )
        results[match.match_number] = score_prediction(
            entry.home, entry.away, match.home_score, match.away_score,
            match.stage, settings, pso,
        )
    return results


def score_member(member_id: str, predictions: PredictionMap, matches: list[Match], teams: list[Team],
                 conduct: list[ConductRecord] | None, settings: ScoringConfig,
                 tournament_awards: TournamentAwards | None = None,
                 annex_table: dict[str, AnnexCRow] | None = None) -> MemberScore:
    return MemberScore(
        member_id=member_id,
        match_scores=score_member_matches(predictions, matches, settings),
        bonuses=calculate_all_bonus_points(member_id, predictions, matches, teams, conduct,
                                           settings, tournament_awards, annex_table),
    )


def rank_members(scores: list[MemberScore]) -> list[MemberScore]:
    """Order members by total points; equal totals share a rank."""
    ordered = sorted(scores, key=lambda s: (-s.total, s.member_id))
    previous_total = None
    rank = 0
    for position, score in enumerate(ordered, 1):
        if score.total != previous_total:
            rank = position
            previous_total = score.total
        score.rank = rank
    return ordered
