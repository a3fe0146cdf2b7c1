"""World Cup pool bracket engine - CLI entry point.

Usage:
    python cli.py schedule [--output matches.csv]
    python cli.py standings [--member alice] [--group A]
    python cli.py bracket [--member alice]
    python cli.py score --predicted 2-1 --actual 2-1 [--stage final] [--pso-predicted 4-3 --pso-actual 5-4]
    python cli.py bonus --member alice
    python cli.py leaderboard
    python cli.py advance [--write]

All commands read from a data directory (default: ./data, see --data):
    teams.csv, matches.csv, conduct.csv, scoring.json, predictions/<member>.csv
--annex-c points at a replacement Annex C table (same columns as
engine/data/annex_c.csv), for example the official published one.
"""

import argparse
import os
import sys

from tabulate import tabulate
from tqdm import tqdm

import config
from engine.errors import StructuralError
from models.prediction import build_actual_results
from models.scoring import PsoInputs, ScoringConfig


def _path(args, name: str) -> str:
    return os.path.join(args.data, name)


def load_tournament(args):
    """Load teams, schedule, conduct records and scoring settings from the data directory."""
    from ingestion.manual_entry import load_conduct_from_csv, load_matches_from_csv, load_teams_from_csv
    from ingestion.pool_settings import load_settings_from_json
    from ingestion.schedule import build_schedule

    teams = load_teams_from_csv(_path(args, "teams.csv"))

    if os.path.exists(_path(args, "matches.csv")):
        matches = load_matches_from_csv(_path(args, "matches.csv"), teams)
    else:
        print("No matches.csv found, using the default schedule.")
        matches = build_schedule(teams)

    conduct = []
    if os.path.exists(_path(args, "conduct.csv")):
        conduct = load_conduct_from_csv(_path(args, "conduct.csv"))

    settings = ScoringConfig()
    if os.path.exists(_path(args, "scoring.json")):
        settings = load_settings_from_json(_path(args, "scoring.json"))

    return teams, matches, conduct, settings


def load_annex_table(args):
    """A replacement Annex-C table from --annex-c, or None for the bundled one."""
    if not args.annex_c:
        return None
    from engine.annex_c import load_annex_c
    table = load_annex_c(args.annex_c)
    print(f"Loaded {len(table)} Annex C options from {args.annex_c}")
    return table


def load_member(args, member_id: str):
    from ingestion.manual_entry import load_predictions_from_csv
    return load_predictions_from_csv(os.path.join(args.data, "predictions", f"{member_id}.csv"))


def _parse_score(text: str) -> tuple[int, int]:
    try:
        home, away = text.split("-")
        return int(home), int(away)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a score like 2-1, got {text!r}")


def _resolve_for(args, teams, matches, conduct):
    """Resolve the member's predicted bracket, or the actual one when no member is given."""
    from engine.resolver import resolve_bracket

    if args.member:
        return resolve_bracket(matches, load_member(args, args.member), teams,
                               annex_table=load_annex_table(args))
    return resolve_bracket(matches, build_actual_results(matches), teams, conduct, load_annex_table(args))


# --- Commands ---

def cmd_schedule(args):
    """Write the default 104-match schedule."""
    from ingestion.manual_entry import load_teams_from_csv, save_matches_to_csv
    from ingestion.schedule import build_schedule

    teams = load_teams_from_csv(_path(args, "teams.csv"))
    matches = build_schedule(teams)
    save_matches_to_csv(matches, args.output or _path(args, "matches.csv"))
    return 0


def cmd_standings(args):
    """Show group tables and the third-place ranking."""
    from output.printer import print_group_standings, print_third_place_table

    teams, matches, conduct, _ = load_tournament(args)
    bracket = _resolve_for(args, teams, matches, conduct)

    groups = [args.group.upper()] if args.group else None
    print_group_standings(bracket, groups)
    if not groups:
        print_third_place_table(bracket)
    return 0


def cmd_bracket(args):
    """Show the resolved knockout bracket."""
    from output.printer import print_bracket

    teams, matches, conduct, _ = load_tournament(args)
    bracket = _resolve_for(args, teams, matches, conduct)
    print_bracket(bracket, matches)
    return 0


def cmd_score(args):
    """Score a single prediction with the pool's settings."""
    from engine.scorer import score_prediction
    from ingestion.pool_settings import load_settings_from_json
    from output.printer import print_score_result

    settings = ScoringConfig()
    if os.path.exists(_path(args, "scoring.json")):
        settings = load_settings_from_json(_path(args, "scoring.json"))

    pso = None
    if args.pso_actual:
        predicted_pso = args.pso_predicted or (None, None)
        pso = PsoInputs(
            actual_home_pso=args.pso_actual[0],
            actual_away_pso=args.pso_actual[1],
            predicted_home_pso=predicted_pso[0],
            predicted_away_pso=predicted_pso[1],
        )

    result = score_prediction(args.predicted[0], args.predicted[1], args.actual[0], args.actual[1],
                              args.stage, settings, pso)
    print_score_result(result)
    return 0


def cmd_bonus(args):
    """Itemized bonus points for one member."""
    from engine.bonus import calculate_all_bonus_points
    from output.printer import print_bonus_breakdown

    teams, matches, conduct, settings = load_tournament(args)
    predictions = load_member(args, args.member)
    awards = calculate_all_bonus_points(args.member, predictions, matches, teams, conduct, settings,
                                        annex_table=load_annex_table(args))
    print_bonus_breakdown(awards)
    return 0


def cmd_leaderboard(args):
    """Rank every member of the pool."""
    from engine.leaderboard import rank_members, score_member
    from ingestion.manual_entry import load_member_predictions
    from output.printer import print_leaderboard

    predictions_dir = _path(args, "predictions")
    if not os.path.isdir(predictions_dir):
        print(f"ERROR: No predictions directory at {predictions_dir}")
        return 1

    teams, matches, conduct, settings = load_tournament(args)
    members = load_member_predictions(predictions_dir)
    annex_table = load_annex_table(args)
    if not members:
        print(f"ERROR: No member prediction files in {predictions_dir}")
        return 1

    scores = []
    for member_id, predictions in tqdm(members.items(), desc="Scoring members"):
        scores.append(score_member(member_id, predictions, matches, teams, conduct, settings,
                                   annex_table=annex_table))

    print_leaderboard(rank_members(scores))
    return 0


def cmd_advance(args):
    """Show which team belongs in each knockout slot from actual results."""
    from engine.advancement import apply_advancement, changed_slots, plan_advancement
    from ingestion.manual_entry import save_matches_to_csv

    teams, matches, conduct, _ = load_tournament(args)
    plan = plan_advancement(matches, teams, conduct, load_annex_table(args))
    changes = changed_slots(matches, plan)
    rows = [[a.match_number, a.side, a.team_id or "-", a.team_name or "(clear)", "*" if a in changes else ""]
            for a in plan]
    print(tabulate(rows, headers=["Match", "Side", "Team id", "Team", "Changed"], tablefmt="simple"))

    if args.write:
        save_matches_to_csv(apply_advancement(matches, plan), _path(args, "matches.csv"))
    else:
        print(f"\n{len(changes)} slot(s) to update. Re-run with --write to save them.")
    return 0


# --- Main ---

def main(argv=None):
    parser = argparse.ArgumentParser(
        description="World Cup prediction pool: bracket resolution and scoring",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Workflow:
  1. python cli.py schedule                 # Write matches.csv from teams.csv
  2. (record results in matches.csv, member picks in predictions/)
  3. python cli.py standings                # Actual group tables
  4. python cli.py bracket --member alice   # A member's predicted bracket
  5. python cli.py leaderboard              # Pool ranking with bonuses
        """
    )
    parser.add_argument("--data", default=config.DATA_DIR, help="Data directory")
    parser.add_argument("--annex-c", help="Annex C table CSV to use instead of the bundled one")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    p_schedule = subparsers.add_parser("schedule", help="Write the default schedule")
    p_schedule.add_argument("--output", help="CSV path (default: <data>/matches.csv)")

    p_standings = subparsers.add_parser("standings", help="Show group standings")
    p_standings.add_argument("--member", help="Use this member's predictions instead of actual results")
    p_standings.add_argument("--group", help="Only show one group")

    p_bracket = subparsers.add_parser("bracket", help="Show the resolved knockout bracket")
    p_bracket.add_argument("--member", help="Use this member's predictions instead of actual results")

    p_score = subparsers.add_parser("score", help="Score a single prediction")
    p_score.add_argument("--predicted", type=_parse_score, required=True)
    p_score.add_argument("--actual", type=_parse_score, required=True)
    p_score.add_argument("--stage", choices=config.STAGES, default=config.GROUP_STAGE)
    p_score.add_argument("--pso-predicted", type=_parse_score)
    p_score.add_argument("--pso-actual", type=_parse_score)

    p_bonus = subparsers.add_parser("bonus", help="Itemized bonus points for a member")
    p_bonus.add_argument("--member", required=True)

    subparsers.add_parser("leaderboard", help="Rank all members")
    p_advance = subparsers.add_parser("advance", help="Plan knockout slot assignments from actual results")
    p_advance.add_argument("--write", action="store_true", help="Save the assignments to matches.csv")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "schedule": cmd_schedule,
        "standings": cmd_standings,
        "bracket": cmd_bracket,
        "score": cmd_score,
        "bonus": cmd_bonus,
        "leaderboard": cmd_leaderboard,
        "advance": cmd_advance,
    }

    if args.command != "score" and not os.path.exists(_path(args, "teams.csv")):
        print(f"ERROR: No teams.csv in {args.data}")
        return 1

    try:
        return commands[args.command](args)
    except StructuralError as e:
        print(f"ERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
