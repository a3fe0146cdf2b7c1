"""
Smoke tests for the command line entry point.
"""
import json

from cli import main
from conftest import write_teams


def test_score_needs_no_data(tmp_path, capsys):
    assert main(["--data", str(tmp_path), "score", "--predicted", "2-1", "--actual", "2-1"]) == 0
    assert "Exact! +5" in capsys.readouterr().out


def test_score_uses_pool_settings(tmp_path, capsys):
    (tmp_path / "scoring.json").write_text(json.dumps({"knockout_exact_score": 200, "final_multiplier": 8}))
    assert main(["--data", str(tmp_path), "score", "--predicted", "1-0", "--actual", "1-0",
                 "--stage", "final"]) == 0
    assert "Exact! +1600" in capsys.readouterr().out


def test_missing_teams(tmp_path, capsys):
    assert main(["--data", str(tmp_path), "standings"]) == 1
    assert "No teams.csv" in capsys.readouterr().out


def test_schedule_then_bracket(tmp_path, capsys):
    write_teams(tmp_path / "teams.csv")
    assert main(["--data", str(tmp_path), "schedule"]) == 0
    assert (tmp_path / "matches.csv").exists()

    assert main(["--data", str(tmp_path), "bracket"]) == 0
    out = capsys.readouterr().out
    assert "ROUND OF 32" in out.upper()
    assert "CHAMPION:    TBD" in out


def test_member_bonus_and_leaderboard(tmp_path, capsys):
    write_teams(tmp_path / "teams.csv")
    predictions = tmp_path / "predictions"
    predictions.mkdir()
    (predictions / "alice.csv").write_text("match_id,home,away\nM001,1,0\n")

    assert main(["--data", str(tmp_path), "bonus", "--member", "alice"]) == 0
    assert "No bonus points yet." in capsys.readouterr().out

    assert main(["--data", str(tmp_path), "leaderboard"]) == 0
    assert "alice" in capsys.readouterr().out


def test_advance(tmp_path, capsys):
    write_teams(tmp_path / "teams.csv")
    assert main(["--data", str(tmp_path), "advance"]) == 0
    assert "(clear)" in capsys.readouterr().out


def test_advance_write_keeps_placeholders(tmp_path, capsys, completed_schedule, teams):
    from ingestion.manual_entry import load_matches_from_csv, save_matches_to_csv
    from models.match import WinnerOf

    write_teams(tmp_path / "teams.csv")
    save_matches_to_csv(completed_schedule, str(tmp_path / "matches.csv"))

    assert main(["--data", str(tmp_path), "advance"]) == 0
    assert "64 slot(s) to update" in capsys.readouterr().out

    assert main(["--data", str(tmp_path), "advance", "--write"]) == 0
    loaded = {m.match_number: m for m in load_matches_from_csv(str(tmp_path / "matches.csv"), teams)}
    assert loaded[104].home_team_id == "C1"
    assert loaded[104].home == WinnerOf(101)


def test_replacement_annex_table(tmp_path, capsys):
    write_teams(tmp_path / "teams.csv")
    (tmp_path / "annex.csv").write_text("option,combination,75\n1,ABCDEFGH,A\n")
    assert main(["--data", str(tmp_path), "--annex-c", str(tmp_path / "annex.csv"), "bracket"]) == 1
    assert "ERROR:" in capsys.readouterr().out
