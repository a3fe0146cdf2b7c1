"""Group standings calculation.

Builds the win/draw/loss table for one group from a set of score entries
(predictions or actual results) and orders it with the tie-break chain:

1. points
2. goal difference
3. goals scored
4. head-to-head result, when exactly two teams are level on 1-3 and the
   match between them had a winner
5. fair-play score (fewer card deductions ranks higher)
6. strength rating (FIFA ranking points)

Matches without a score entry are skipped, so the table works as "standings
so far" for a half-filled prediction set.
"""

from itertools import groupby

import config
from models.match import ConcreteTeam, Match
from models.prediction import ConductRecord, PredictionMap
from models.standing import GroupStanding
from models.team import Team


def calculate_group_standings(group_letter: str, matches: list[Match], predictions: PredictionMap,
                              teams: list[Team],
                              conduct: list[ConductRecord] | None = None) -> list[GroupStanding]:
    """Calculate the ordered table for one group.

    Args:
        group_letter: "A" to "L"
        matches: group matches (matches from other groups or stages are ignored)
        predictions: {match_id: ScoreEntry}
        teams: all teams (only this group's teams are used)
        conduct: optional card counts for the fair-play tie-break

    Returns:
        Standings ordered 1st to 4th
    """
    rows = {t.team_id: GroupStanding(team=t) for t in teams if t.group_letter == group_letter}
    conduct_by_key = {(c.match_id, c.team_id): c for c in (conduct or [])}

    group_matches = group_matches_for(group_letter, matches)

    for match in group_matches:
        entry = predictions.get(match.match_id)
        if entry is None:
            continue
        home_id, away_id = _team_ids(match)
        home = rows.get(home_id)
        away = rows.get(away_id)
        if home is None or away is None:
            continue

        home.record_result(entry.home, entry.away)
        away.record_result(entry.away, entry.home)

        for row in (home, away):
            record = conduct_by_key.get((match.match_id, row.team_id))
            if record:
                row.fair_play += record.fair_play_score

    return sort_standings(list(rows.values()), group_matches, predictions)


def group_matches_for(group_letter: str, matches: list[Match]) -> list[Match]:
    return [m for m in matches
            if m.stage == config.GROUP_STAGE and m.group_letter == group_letter]


def ranking_key(standing: GroupStanding) -> tuple:
    """Sort key for the tie-break chain without head-to-head (ascending = best first).

    Team id is the last element so the order is total even for identical rows.
    """
    return (
        -standing.points,
        -standing.goal_difference,
        -standing.goals_for,
        -standing.fair_play,
        -standing.team.strength,
        standing.team_id,
    )


def _table_key(standing: GroupStanding) -> tuple:
    return (standing.points, standing.goal_difference, standing.goals_for)


def sort_standings(rows: list[GroupStanding], group_matches: list[Match],
                   predictions: PredictionMap) -> list[GroupStanding]:
    """Order a group table, applying head-to-head between two level teams."""
    ordered = sorted(rows, key=ranking_key)

    result = []
    for _, level in groupby(ordered, key=_table_key):
        level = list(level)
        if len(level) == 2:
            winner_id = head_to_head_winner(level[0].team_id, level[1].team_id,
                                            group_matches, predictions)
            if winner_id == level[1].team_id:
                level.reverse()
        result.extend(level)
    return result


def head_to_head_winner(team_a: str, team_b: str, group_matches: list[Match],
                        predictions: PredictionMap) -> str | None:
    """Winner of the scored match(es) between two teams, None if level or unplayed."""
    goals = {team_a: 0, team_b: 0}
    played = False

    for match in group_matches:
        home_id, away_id = _team_ids(match)
        if {home_id, away_id} != {team_a, team_b}:
            continue
        entry = predictions.get(match.match_id)
        if entry is None:
            continue
        played = True
        goals[home_id] += entry.home
        goals[away_id] += entry.away

    if not played or goals[team_a] == goals[team_b]:
        return None
    return team_a if goals[team_a] > goals[team_b] else team_b


def _team_ids(match: Match) -> tuple[str | None, str | None]:
    home = match.home.team_id if isinstance(match.home, ConcreteTeam) else None
    away = match.away.team_id if isinstance(match.away, ConcreteTeam) else None
    return home, away
