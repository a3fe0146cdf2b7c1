"""Bonus points.

Resolves the bracket twice, once from a member's predictions and once from the
actual results, and compares the two in five independent categories:

A. group standings   (per group, once all 6 group matches are completed)
B. qualification     (once, after the whole group stage is completed)
C. bracket pairings  (per Round of 32 fixture, order of the two teams ignored)
D. match winners     (per completed knockout match)
E. podium            (champion, runner-up, third place)

Every award is returned as its own BonusAward so the breakdown can be shown
line by line. Categories the pool has switched off (no points configured)
produce no awards.
"""

import math

import config
from engine.annex_c import AnnexCRow
from engine.resolver import resolve_bracket
from engine.standings import group_matches_for
from models.bracket import BracketResult
from models.match import Match
from models.prediction import ConductRecord, PredictionMap, build_actual_results
from models.scoring import BonusAward, ScoringConfig, TournamentAwards
from models.standing import GroupStanding
from models.team import Team


def calculate_all_bonus_points(member_id: str, member_predictions: PredictionMap, matches: list[Match],
                               teams: list[Team], conduct: list[ConductRecord] | None,
                               settings: ScoringConfig,
                               tournament_awards: TournamentAwards | None = None,
                               annex_table: dict[str, AnnexCRow] | None = None) -> list[BonusAward]:
    """Calculate every bonus award for one member.

    Args:
        member_id: the member being scored
        member_predictions: {match_id: ScoreEntry} for that member
        matches: the full schedule with actual results on completed matches
        teams: the 48 teams
        conduct: actual card counts (used for the actual bracket only)
        settings: pool scoring configuration
        tournament_awards: official podium; when omitted the podium of the
            actual bracket is used
        annex_table: optional Annex-C table (defaults to the bundled one)

    Returns:
        List of BonusAward, grouped by category A to E
    """
    predicted = resolve_bracket(matches, member_predictions, teams, annex_table=annex_table)
    actual = resolve_bracket(matches, build_actual_results(matches), teams, conduct, annex_table)

    awards = []
    awards.extend(group_standings_bonuses(member_id, matches, predicted, actual, settings))
    awards.extend(qualification_bonuses(member_id, matches, predicted, actual, settings))
    awards.extend(bracket_pairing_bonuses(member_id, matches, predicted, actual, settings))
    awards.extend(match_winner_bonuses(member_id, matches, predicted, actual, settings))

    if tournament_awards is None:
        tournament_awards = TournamentAwards(
            champion_team_id=actual.champion.team_id if actual.champion else None,
            runner_up_team_id=actual.runner_up.team_id if actual.runner_up else None,
            third_place_team_id=actual.third_place.team_id if actual.third_place else None,
        )
    awards.extend(podium_bonuses(member_id, predicted, tournament_awards, settings))
    return awards


# --- A. Group standings ---

def group_standings_award(member_id: str, group_letter: str, predicted: list[GroupStanding],
                          actual: list[GroupStanding], settings: ScoringConfig) -> BonusAward | None:
    """The single best-matching group standings award for one group."""
    if len(predicted) < 2 or len(actual) < 2:
        return None

    p_winner, p_runner_up = predicted[0].team_id, predicted[1].team_id
    a_winner, a_runner_up = actual[0].team_id, actual[1].team_id
    winner_name, runner_up_name = actual[0].team.name, actual[1].team.name

    if p_winner == a_winner and p_runner_up == a_runner_up:
        bonus_type = "group_winner_and_runnerup"
        description = f"Group {group_letter}: Correct winner ({winner_name}) AND runner-up ({runner_up_name})"
    elif p_winner == a_runner_up and p_runner_up == a_winner:
        bonus_type = "both_qualify_swapped"
        description = f"Group {group_letter}: Both qualify but positions swapped"
    elif p_winner == a_winner:
        bonus_type = "group_winner_only"
        description = f"Group {group_letter}: Correct winner ({winner_name})"
    elif p_runner_up == a_runner_up:
        bonus_type = "group_runnerup_only"
        description = f"Group {group_letter}: Correct runner-up ({runner_up_name})"
    elif p_winner == a_runner_up or p_runner_up == a_winner:
        bonus_type = "one_qualifies_wrong_position"
        description = f"Group {group_letter}: One correct qualifier but wrong position"
    else:
        return None

    points = settings.bonus(bonus_type)
    if points <= 0:
        return None
    return BonusAward(
        member_id=member_id,
        bonus_type=bonus_type,
        category="group_standings",
        points=points,
        description=description,
        group_letter=group_letter,
    )


def group_standings_bonuses(member_id: str, matches: list[Match], predicted: BracketResult,
                            actual: BracketResult, settings: ScoringConfig) -> list[BonusAward]:
    awards = []
    for letter in config.GROUP_LETTERS:
        group_matches = group_matches_for(letter, matches)
        if len(group_matches) < 6 or not all(m.is_completed for m in group_matches):
            continue
        award = group_standings_award(member_id, letter,
                                      predicted.group_standings.get(letter, []),
                                      actual.group_standings.get(letter, []),
                                      settings)
        if award:
            awards.append(award)
    return awards


# --- B. Overall qualification ---

def group_stage_complete(matches: list[Match]) -> bool:
    group_matches = [m for m in matches if m.is_group_stage]
    return bool(group_matches) and all(m.is_completed for m in group_matches)


def qualification_bonuses(member_id: str, matches: list[Match], predicted: BracketResult,
                          actual: BracketResult, settings: ScoringConfig) -> list[BonusAward]:
    if not group_stage_complete(matches):
        return []

    total = len(actual.qualified_team_ids)
    correct = len(predicted.qualified_team_ids & actual.qualified_team_ids)
    if total == 0:
        return []

    if correct == total:
        bonus_type = "all_qualified"
        description = f"All {total} qualified teams predicted correctly"
    elif correct >= math.ceil(total * config.QUALIFICATION_TIERS["qualified_75pct"]):
        bonus_type = "qualified_75pct"
        description = f"{correct}/{total} qualified teams predicted correctly (75%+)"
    elif correct >= math.ceil(total * config.QUALIFICATION_TIERS["qualified_50pct"]):
        bonus_type = "qualified_50pct"
        description = f"{correct}/{total} qualified teams predicted correctly (50%+)"
    else:
        return []

    points = settings.bonus(bonus_type)
    if points <= 0:
        return []
    return [BonusAward(member_id=member_id, bonus_type=bonus_type, category="qualification",
                       points=points, description=description)]


# --- C. Bracket pairings ---

def bracket_pairing_bonuses(member_id: str, matches: list[Match], predicted: BracketResult,
                            actual: BracketResult, settings: ScoringConfig) -> list[BonusAward]:
    points = settings.bonus("correct_bracket_pairing")
    if points <= 0 or not group_stage_complete(matches):
        return []

    awards = []
    for match in sorted((m for m in matches if m.stage == config.ROUND_32), key=lambda m: m.match_number):
        actual_pair = actual.pairing(match.match_number)
        predicted_pair = predicted.pairing(match.match_number)
        if not actual_pair.is_complete or not predicted_pair.is_complete:
            continue
        if predicted_pair.team_ids() != actual_pair.team_ids():
            continue
        awards.append(BonusAward(
            member_id=member_id,
            bonus_type="correct_bracket_pairing",
            category="bracket",
            points=points,
            description=(f"R32 Match #{match.match_number}: Correct bracket pairing "
                         f"({predicted_pair.home.name} vs {predicted_pair.away.name})"),
            match_number=match.match_number,
            match_id=match.match_id,
        ))
    return awards


# --- D. Match winners ---

def match_winner_bonuses(member_id: str, matches: list[Match], predicted: BracketResult,
                         actual: BracketResult, settings: ScoringConfig) -> list[BonusAward]:
    points = settings.bonus("match_winner_correct")
    if points <= 0:
        return []

    awards = []
    knockout = sorted((m for m in matches if m.is_knockout and m.is_completed), key=lambda m: m.match_number)
    for match in knockout:
        actual_winner = actual.winner_of(match.match_number)
        predicted_winner = predicted.winner_of(match.match_number)
        if actual_winner is None or predicted_winner is None:
            continue
        if actual_winner.team_id != predicted_winner.team_id:
            continue
        stage_name = config.STAGE_SHORT_NAMES[match.stage]
        awards.append(BonusAward(
            member_id=member_id,
            bonus_type="match_winner_correct",
            category="bracket",
            points=points,
            description=f"{stage_name} Match #{match.match_number}: Correct winner ({actual_winner.name})",
            match_number=match.match_number,
            match_id=match.match_id,
        ))
    return awards


# --- E. Podium ---

def podium_bonuses(member_id: str, predicted: BracketResult, awards: TournamentAwards,
                   settings: ScoringConfig) -> list[BonusAward]:
    checks = [
        ("champion_correct", "Champion", predicted.champion, awards.champion_team_id),
        ("second_place_correct", "Runner-up", predicted.runner_up, awards.runner_up_team_id),
        ("third_place_correct", "Third place", predicted.third_place, awards.third_place_team_id),
    ]

    result = []
    for bonus_type, label, team, actual_id in checks:
        if team is None or actual_id is None or team.team_id != actual_id:
            continue
        points = settings.bonus(bonus_type)
        if points <= 0:
            continue
        result.append(BonusAward(
            member_id=member_id,
            bonus_type=bonus_type,
            category="tournament",
            points=points,
            description=f"{label} correct: {team.name}",
        ))
    return result
