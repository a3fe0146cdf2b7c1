"""Pretty-print standings, brackets and scores."""

from tabulate import tabulate

import config
from models.bracket import BracketResult, Decision
from models.match import Match
from models.scoring import BonusAward, ScoreResult


def _name(team) -> str:
    return team.name if team else "TBD"


def print_group_standings(bracket: BracketResult, groups: list[str] | None = None):
    """Print the table for each group."""
    for letter in groups or config.GROUP_LETTERS:
        standings = bracket.group_standings.get(letter, [])
        rows = []
        for pos, s in enumerate(standings, 1):
            rows.append([pos, s.team.name, s.played, s.won, s.drawn, s.lost,
                         s.goals_for, s.goals_against, s.goal_difference, s.fair_play, s.points])
        print(f"\n--- GROUP {letter} ---")
        print(tabulate(rows, headers=["#", "Team", "P", "W", "D", "L", "GF", "GA", "GD", "FP", "Pts"],
                       tablefmt="simple"))


def print_third_place_table(bracket: BracketResult):
    """Print the cross-group ranking of third-placed teams."""
    print("\n=== THIRD-PLACED TEAMS ===\n")
    rows = []
    for q in bracket.third_place_ranking:
        s = q.standing
        rows.append([q.rank, q.group_letter, s.team.name, s.played, s.goal_difference,
                     s.goals_for, s.fair_play, s.points, "Q" if q.qualified else ""])
    print(tabulate(rows, headers=["#", "Grp", "Team", "P", "GD", "GF", "FP", "Pts", ""],
                   tablefmt="simple"))
    if bracket.annex_c_option is not None:
        print(f"\n  Annex C option {bracket.annex_c_option}: "
              f"third places from groups {bracket.qualifying_third_groups}")


def print_bracket(bracket: BracketResult, matches: list[Match]):
    """Print every knockout match, round by round, with its resolved teams."""
    knockout = sorted((m for m in matches if m.is_knockout),
                      key=lambda m: (config.KNOCKOUT_STAGES.index(m.stage), m.match_number))

    current_stage = None
    for m in knockout:
        if m.stage != current_stage:
            current_stage = m.stage
            print(f"\n--- {config.STAGE_LABELS[m.stage].upper()} ---")
        pairing = bracket.pairing(m.match_number)
        home = _name(pairing.home) if pairing.home else str(m.home)
        away = _name(pairing.away) if pairing.away else str(m.away)
        outcome = bracket.outcomes.get(m.match_number)
        if outcome and outcome.is_decided:
            how = {Decision.BY_PSO: " (pens)", Decision.BY_EXPLICIT_PICK: " (pick)"}.get(outcome.decision, "")
            print(f"  #{m.match_number:3d}  {home} vs {away}  ->  {outcome.winner.name}{how}")
        else:
            print(f"  #{m.match_number:3d}  {home} vs {away}")

    print("\n" + "=" * 60)
    print(f"  CHAMPION:    {_name(bracket.champion)}")
    print(f"  RUNNER-UP:   {_name(bracket.runner_up)}")
    print(f"  THIRD PLACE: {_name(bracket.third_place)}")
    print("=" * 60)


def print_score_result(result: ScoreResult):
    rows = [
        ["Tier", result.tier],
        ["Base points", result.base_points],
        ["Multiplier", f"{result.multiplier:g}x"],
    ]
    if result.pso:
        rows.append(["PSO", f"{result.pso.tier} +{result.pso.points}"])
    rows.append(["Total", result.points])
    print(f"\n{result.label}\n")
    print(tabulate(rows, tablefmt="simple"))


def print_bonus_breakdown(awards: list[BonusAward]):
    """Print each bonus award on its own line, with a total."""
    if not awards:
        print("\nNo bonus points yet.")
        return
    rows = [[a.category, a.description, a.points] for a in awards]
    rows.append(["", "TOTAL", sum(a.points for a in awards)])
    print()
    print(tabulate(rows, headers=["Category", "Bonus", "Pts"], tablefmt="simple"))


def print_leaderboard(scores):
    """Print ranked member totals (list of engine.leaderboard.MemberScore)."""
    rows = [[s.rank, s.member_id, s.match_points, s.bonus_points, s.total] for s in scores]
    print("\n=== LEADERBOARD ===\n")
    print(tabulate(rows, headers=["#", "Member", "Matches", "Bonus", "Total"], tablefmt="simple"))
