"""Full bracket resolution.

Works through the tournament in order:

1. group tables for all 12 groups
2. cross-group ranking of the third-placed teams
3. Round of 32 seeding: group winners/runners-up from the tables, best third
   places through the Annex-C row chosen by the 8 qualifying groups
4. R16 -> QF -> SF -> third place -> final, dereferencing each slot
   ("Winner Match 89", "Loser Match 101") against matches already resolved

The resolver is a pure function of its arguments. It never mutates its inputs
and keeps nothing between calls; callers re-run it after every change.
Knockout slots are always dereferenced from their placeholders; the teams that
advancement assigned to a match (home_team_id / away_team_id) are not read here.
"""

import config
from engine.annex_c import AnnexCRow, lookup
from engine.errors import StructuralError
from engine.outcome import resolve_outcome
from engine.standings import calculate_group_standings
from engine.third_place import best_third_place_teams, qualifying_combination, rank_third_place_teams
from models.bracket import BracketResult, Outcome, Pairing
from models.match import BestThird, ConcreteTeam, GroupPosition, LoserOf, Match, Slot, WinnerOf
from models.prediction import ConductRecord, PredictionMap
from models.standing import GroupStanding
from models.team import Team


def index_schedule(matches: list[Match]) -> dict[int, Match]:
    """Index matches by number and check the knockout references.

    Raises:
        StructuralError: on duplicate match numbers, or a Winner/Loser slot that
            references a missing, non-knockout, or not-earlier match
    """
    by_number: dict[int, Match] = {}
    for m in matches:
        if m.match_number in by_number:
            raise StructuralError(f"Duplicate match number {m.match_number}")
        by_number[m.match_number] = m

    for m in matches:
        for slot in (m.home, m.away):
            if not isinstance(slot, (WinnerOf, LoserOf)):
                continue
            source = by_number.get(slot.match_number)
            if source is None:
                raise StructuralError(f"Match {m.match_number}: '{slot}' references an unknown match")
            if slot.match_number >= m.match_number:
                raise StructuralError(f"Match {m.match_number}: '{slot}' references a later match")
            if not source.is_knockout:
                raise StructuralError(f"Match {m.match_number}: '{slot}' references a group match")
    return by_number


def resolve_bracket(matches: list[Match], predictions: PredictionMap, teams: list[Team],
                    conduct: list[ConductRecord] | None = None,
                    annex_table: dict[str, AnnexCRow] | None = None) -> BracketResult:
    """Resolve the whole bracket from one set of score entries.

    Args:
        matches: the full schedule (group and knockout matches)
        predictions: {match_id: ScoreEntry}, a member's picks or actual results
        teams: the 48 teams
        conduct: optional card counts for the fair-play tie-break
        annex_table: optional Annex-C table (defaults to the bundled one)

    Returns:
        BracketResult with standings, knockout pairings and outcomes, podium and
        the set of qualified team ids. Anything that cannot be decided yet is None.

    Raises:
        StructuralError: if the schedule or the Annex-C table is malformed
    """
    by_number = index_schedule(matches)
    teams_by_id = {t.team_id: t for t in teams}

    # 1. Group tables
    group_standings = {
        letter: calculate_group_standings(letter, matches, predictions, teams, conduct)
        for letter in config.GROUP_LETTERS
    }

    # 2. Best third places
    ranking = rank_third_place_teams(group_standings)
    best_thirds = best_third_place_teams(group_standings)
    combination = ""
    annex_row = None
    if len(best_thirds) == config.BEST_THIRD_QUALIFIERS:
        combination = qualifying_combination(best_thirds)
        annex_row = lookup(combination, annex_table)

    # 3 + 4. Knockout cascade, stage by stage
    knockout: dict[int, Pairing] = {}
    outcomes: dict[int, Outcome] = {}

    knockout_matches = sorted(
        (m for m in matches if m.is_knockout),
        key=lambda m: (config.KNOCKOUT_STAGES.index(m.stage), m.match_number),
    )
    for m in knockout_matches:
        home = _resolve_slot(m, m.home, group_standings, annex_row, outcomes, teams_by_id)
        away = _resolve_slot(m, m.away, group_standings, annex_row, outcomes, teams_by_id)
        knockout[m.match_number] = Pairing(home=home, away=away)
        outcomes[m.match_number] = resolve_outcome(predictions.get(m.match_id), home, away, m.stage)

    # 5. Podium
    champion = runner_up = third_place = None
    for m in by_number.values():
        if m.stage == config.FINAL:
            champion = outcomes[m.match_number].winner
            runner_up = outcomes[m.match_number].loser
        elif m.stage == config.THIRD_PLACE:
            third_place = outcomes[m.match_number].winner

    # 6. The 32 qualifiers
    qualified = set()
    for standings in group_standings.values():
        qualified.update(s.team_id for s in standings[:2])
    qualified.update(q.standing.team_id for q in best_thirds)

    return BracketResult(
        group_standings=group_standings,
        third_place_ranking=ranking,
        annex_c_option=annex_row.option if annex_row else None,
        qualifying_third_groups=combination,
        knockout=knockout,
        outcomes=outcomes,
        champion=champion,
        runner_up=runner_up,
        third_place=third_place,
        qualified_team_ids=frozenset(qualified),
    )


def _resolve_slot(match: Match, slot: Slot, group_standings: dict[str, list[GroupStanding]],
                  annex_row: AnnexCRow | None, outcomes: dict[int, Outcome],
                  teams_by_id: dict[str, Team]) -> Team | None:
    """Turn one slot of a knockout match into a team, or None if not decided yet."""
    if isinstance(slot, ConcreteTeam):
        team = teams_by_id.get(slot.team_id)
        if team is None:
            raise StructuralError(f"Match {match.match_number}: unknown team {slot.team_id!r}")
        return team

    if isinstance(slot, GroupPosition):
        return _team_at(group_standings, slot.group, slot.rank)

    if isinstance(slot, BestThird):
        if annex_row is None:
            return None
        group = annex_row.group_for(match.match_number, slot)
        return _team_at(group_standings, group, 3)

    if isinstance(slot, (WinnerOf, LoserOf)):
        outcome = outcomes.get(slot.match_number)
        if outcome is None:
            raise StructuralError(
                f"Match {match.match_number}: '{slot}' was not resolved before this match")
        return outcome.winner if isinstance(slot, WinnerOf) else outcome.loser

    raise StructuralError(f"Match {match.match_number}: unsupported slot {slot!r}")


def _team_at(group_standings: dict[str, list[GroupStanding]], group: str, rank: int) -> Team | None:
    table = group_standings.get(group)
    if table is None:
        raise StructuralError(f"Unknown group {group!r}")
    return table[rank - 1].team if len(table) >= rank else None
