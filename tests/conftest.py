"""
Shared pytest fixtures for the bracket engine tests.

The synthetic tournament: 48 teams "A1".."L4", where the number is the seeding
position inside the group and strength falls from group A to L and from
position 1 to 4. In the "favourites" result set the better-seeded team wins
every group match 1-0 and the home side wins every knockout match 1-0.
"""
import dataclasses

import pandas as pd
import pytest

import config
from ingestion.schedule import build_schedule
from models.prediction import ScoreEntry
from models.team import Team


def make_teams() -> list[Team]:
    teams = []
    for gi, letter in enumerate(config.GROUP_LETTERS):
        for pos in range(1, 5):
            teams.append(Team(
                team_id=f"{letter}{pos}",
                name=f"Team {letter}{pos}",
                country_code=f"{letter}{pos}",
                group_letter=letter,
                strength=2000 - 10 * gi - pos,
            ))
    return teams


def write_teams(path) -> str:
    """Write make_teams() as a teams.csv file."""
    rows = [{"team_id": t.team_id, "name": t.name, "country_code": t.country_code,
             "group_letter": t.group_letter, "strength": t.strength} for t in make_teams()]
    pd.DataFrame(rows).to_csv(path, index=False)
    return str(path)


def favourite_results(matches) -> dict:
    results = {}
    for m in matches:
        if m.is_group_stage:
            home_pos = int(m.home.team_id[1:])
            away_pos = int(m.away.team_id[1:])
            results[m.match_id] = ScoreEntry(1, 0) if home_pos < away_pos else ScoreEntry(0, 1)
        else:
            results[m.match_id] = ScoreEntry(1, 0)
    return results


def underdog_results(matches) -> dict:
    """Every group finishes in reverse seeding order; knockouts as in favourite_results."""
    results = favourite_results(matches)
    for m in matches:
        if m.is_group_stage:
            entry = results[m.match_id]
            results[m.match_id] = ScoreEntry(entry.away, entry.home)
    return results


def with_results(matches, results: dict):
    """Copy of the schedule with the given entries recorded as completed results."""
    updated = []
    for m in matches:
        entry = results.get(m.match_id)
        if entry is None:
            updated.append(m)
            continue
        updated.append(dataclasses.replace(
            m,
            status="completed",
            home_score=entry.home,
            away_score=entry.away,
            home_pso=entry.home_pso,
            away_pso=entry.away_pso,
            winner_team_id=entry.winner_team_id,
        ))
    return updated


def find_match(matches, home_id: str, away_id: str):
    for m in matches:
        if m.is_group_stage and m.home.team_id == home_id and m.away.team_id == away_id:
            return m
    raise LookupError(f"No group match {home_id} vs {away_id}")


def by_number(matches, number: int):
    return next(m for m in matches if m.match_number == number)


@pytest.fixture
def teams():
    return make_teams()


@pytest.fixture
def schedule(teams):
    return build_schedule(teams)


@pytest.fixture
def favourites(schedule):
    return favourite_results(schedule)


@pytest.fixture
def completed_schedule(schedule, favourites):
    """Whole tournament played, favourites winning everything."""
    return with_results(schedule, favourites)


@pytest.fixture
def group_stage_done(schedule, favourites):
    """Group stage played, knockout rounds not started."""
    group_results = {m.match_id: favourites[m.match_id] for m in schedule if m.is_group_stage}
    return with_results(schedule, group_results)
