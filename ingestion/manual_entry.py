"""CSV loading for teams, matches, predictions and conduct records.

Expected files (header row required):

    teams.csv        team_id, name, country_code, group_letter, strength [, badge_url]
    matches.csv      match_id, match_number, stage, group_letter, home, away
                     [, home_team_id, away_team_id, status, home_score, away_score,
                      home_pso, away_pso, winner_team_id, completed_at]
    <member>.csv     match_id, home, away [, home_pso, away_pso, winner_team_id]
    conduct.csv      match_id, team_id, yellow_cards, indirect_red_cards,
                     direct_red_cards, yellow_direct_red_cards

In matches.csv a home/away value is either a team id or placeholder text such
as "Winner Match 74". home_team_id / away_team_id hold the teams advancement
assigned to a knockout match; they never replace the placeholder.
"""

import os

import pandas as pd

from models.match import Match, parse_slot
from models.prediction import ConductRecord, PredictionMap, ScoreEntry
from models.team import Team

TEAM_COLUMNS = ["team_id", "name", "country_code", "group_letter", "strength"]
MATCH_COLUMNS = ["match_id", "match_number", "stage", "home", "away"]
PREDICTION_COLUMNS = ["match_id", "home", "away"]
CONDUCT_COLUMNS = ["match_id", "team_id"]


def _require_columns(df: pd.DataFrame, columns: list[str], filepath: str):
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(f"{filepath}: missing column(s) {', '.join(missing)}")


def _opt_int(value) -> int | None:
    if value is None or pd.isna(value) or value == "":
        return None
    return int(float(value))


def _opt_str(value) -> str | None:
    if value is None or pd.isna(value):
        return None
    value = str(value).strip()
    return value or None


def load_teams_from_csv(filepath: str) -> list[Team]:
    """Load the competing teams."""
    df = pd.read_csv(filepath, dtype={"team_id": str, "group_letter": str})
    _require_columns(df, TEAM_COLUMNS, filepath)

    teams = []
    for _, row in df.iterrows():
        teams.append(Team(
            team_id=str(row["team_id"]).strip(),
            name=str(row["name"]).strip(),
            country_code=str(row["country_code"]).strip(),
            group_letter=str(row["group_letter"]).strip().upper(),
            strength=float(row["strength"]),
            badge_url=_opt_str(row.get("badge_url")),
        ))

    print(f"Loaded {len(teams)} teams from {filepath}")
    return teams


def load_matches_from_csv(filepath: str, teams: list[Team]) -> list[Match]:
    """Load the schedule with any recorded results."""
    df = pd.read_csv(filepath, dtype={"match_id": str, "home": str, "away": str,
                                      "group_letter": str, "winner_team_id": str,
                                      "home_team_id": str, "away_team_id": str})
    _require_columns(df, MATCH_COLUMNS, filepath)
    team_ids = {t.team_id for t in teams}

    matches = []
    for _, row in df.iterrows():
        matches.append(Match(
            match_id=str(row["match_id"]).strip(),
            match_number=int(row["match_number"]),
            stage=str(row["stage"]).strip(),
            group_letter=_opt_str(row.get("group_letter")),
            home=parse_slot(row["home"], team_ids),
            away=parse_slot(row["away"], team_ids),
            home_team_id=_opt_str(row.get("home_team_id")),
            away_team_id=_opt_str(row.get("away_team_id")),
            status=_opt_str(row.get("status")) or "scheduled",
            home_score=_opt_int(row.get("home_score")),
            away_score=_opt_int(row.get("away_score")),
            home_pso=_opt_int(row.get("home_pso")),
            away_pso=_opt_int(row.get("away_pso")),
            winner_team_id=_opt_str(row.get("winner_team_id")),
            completed_at=_opt_str(row.get("completed_at")),
        ))

    print(f"Loaded {len(matches)} matches from {filepath}")
    return matches


def save_matches_to_csv(matches: list[Match], filepath: str):
    """Write a schedule (with results) in the format load_matches_from_csv reads."""
    rows = []
    for m in sorted(matches, key=lambda m: m.match_number):
        rows.append({
            "match_id": m.match_id,
            "match_number": m.match_number,
            "stage": m.stage,
            "group_letter": m.group_letter,
            "home": str(m.home),
            "away": str(m.away),
            "home_team_id": m.home_team_id,
            "away_team_id": m.away_team_id,
            "status": m.status,
            "home_score": m.home_score,
            "away_score": m.away_score,
            "home_pso": m.home_pso,
            "away_pso": m.away_pso,
            "winner_team_id": m.winner_team_id,
            "completed_at": m.completed_at,
        })

    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)
    pd.DataFrame(rows).to_csv(filepath, index=False)
    print(f"Saved {len(rows)} matches to {filepath}")


def load_predictions_from_csv(filepath: str) -> PredictionMap:
    """Load one member's score predictions."""
    df = pd.read_csv(filepath, dtype={"match_id": str, "winner_team_id": str})
    _require_columns(df, PREDICTION_COLUMNS, filepath)

    predictions: PredictionMap = {}
    for _, row in df.iterrows():
        home = _opt_int(row["home"])
        away = _opt_int(row["away"])
        if home is None or away is None:
            continue
        predictions[str(row["match_id"]).strip()] = ScoreEntry(
            home=home,
            away=away,
            home_pso=_opt_int(row.get("home_pso")),
            away_pso=_opt_int(row.get("away_pso")),
            winner_team_id=_opt_str(row.get("winner_team_id")),
        )

    print(f"Loaded {len(predictions)} predictions from {filepath}")
    return predictions


def load_conduct_from_csv(filepath: str) -> list[ConductRecord]:
    """Load disciplinary card counts."""
    df = pd.read_csv(filepath, dtype={"match_id": str, "team_id": str})
    _require_columns(df, CONDUCT_COLUMNS, filepath)

    records = []
    for _, row in df.iterrows():
        records.append(ConductRecord(
            match_id=str(row["match_id"]).strip(),
            team_id=str(row["team_id"]).strip(),
            yellow_cards=_opt_int(row.get("yellow_cards")) or 0,
            indirect_red_cards=_opt_int(row.get("indirect_red_cards")) or 0,
            direct_red_cards=_opt_int(row.get("direct_red_cards")) or 0,
            yellow_direct_red_cards=_opt_int(row.get("yellow_direct_red_cards")) or 0,
        ))

    print(f"Loaded {len(records)} conduct records from {filepath}")
    return records


def load_member_predictions(directory: str) -> dict[str, PredictionMap]:
    """Load every <member>.csv in a directory, keyed by member id (file stem)."""
    members = {}
    for filename in sorted(os.listdir(directory)):
        if not filename.endswith(".csv"):
            continue
        member_id = os.path.splitext(filename)[0]
        members[member_id] = load_predictions_from_csv(os.path.join(directory, filename))
    return members
