"""Winner/loser determination.

One decision table, used everywhere a knockout winner is needed (bracket
resolution, the match winner bonus, advancement planning):

1. either team unknown            -> undetermined
2. no score entry                 -> undetermined
3. full-time score not level      -> higher score wins          (BY_SCORE)
4. level, group stage             -> undetermined (a draw is a result)
5. level, shootout score decides  -> higher shootout score wins (BY_PSO)
6. level, explicit winner pick    -> the picked team wins       (BY_EXPLICIT_PICK)
7. otherwise                      -> undetermined
"""

import config
from models.bracket import UNDETERMINED, Decision, Outcome
from models.match import Match
from models.prediction import ScoreEntry
from models.team import Team


def resolve_outcome(entry: ScoreEntry | None, home: Team | None, away: Team | None,
                    stage: str) -> Outcome:
    """Decide the winner and loser of one match."""
    if home is None or away is None or entry is None:
        return UNDETERMINED

    if entry.home > entry.away:
        return Outcome(Decision.BY_SCORE, winner=home, loser=away)
    if entry.away > entry.home:
        return Outcome(Decision.BY_SCORE, winner=away, loser=home)

    if stage == config.GROUP_STAGE:
        return UNDETERMINED

    if entry.has_deciding_pso:
        if entry.home_pso > entry.away_pso:
            return Outcome(Decision.BY_PSO, winner=home, loser=away)
        return Outcome(Decision.BY_PSO, winner=away, loser=home)

    if entry.winner_team_id == home.team_id:
        return Outcome(Decision.BY_EXPLICIT_PICK, winner=home, loser=away)
    if entry.winner_team_id == away.team_id:
        return Outcome(Decision.BY_EXPLICIT_PICK, winner=away, loser=home)

    return UNDETERMINED


def determine_winner_id(match: Match, home_team_id: str | None, away_team_id: str | None) -> str | None:
    """Winner of a completed match record, by team id.

    The match's own recorded score, shootout score and recorded winner are
    run through the same decision table as predictions.
    """
    if not match.has_result or not home_team_id or not away_team_id:
        return None
    entry = ScoreEntry(
        home=match.home_score,
        away=match.away_score,
        home_pso=match.home_pso,
        away_pso=match.away_pso,
        winner_team_id=match.winner_team_id,
    )
    outcome = resolve_outcome(entry, _ref(home_team_id), _ref(away_team_id), match.stage)
    return outcome.winner.team_id if outcome.is_decided else None


def determine_loser_id(match: Match, home_team_id: str | None, away_team_id: str | None) -> str | None:
    """Loser of a completed match record: whichever side did not win."""
    winner_id = determine_winner_id(match, home_team_id, away_team_id)
    if winner_id is None:
        return None
    return away_team_id if winner_id == home_team_id else home_team_id


def _ref(team_id: str) -> Team:
    # Only identity matters to the decision table
    return Team(team_id=team_id, name=team_id, country_code="", group_letter="", strength=0)
