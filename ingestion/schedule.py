"""The 104-match schedule.

- Matches 1-72:   group stage, 6 per group, played over 3 matchdays
- Matches 73-88:  Round of 32 (fixed fixture table, see config.R32_FIXTURES)
- Matches 89-104: Round of 16, quarter-finals, semi-finals, third place, final

Knockout placeholders are parsed into typed slots here, once, so the resolver
never looks at placeholder text.
"""

import config
from models.match import ConcreteTeam, Match, parse_placeholder
from models.team import Team


def teams_by_group(teams: list[Team]) -> dict[str, list[Team]]:
    """Group teams by letter, keeping their seeding order (position 1-4).

    Raises:
        ValueError: if the teams are not 12 groups of 4
    """
    groups = {letter: [] for letter in config.GROUP_LETTERS}
    for team in teams:
        if team.group_letter not in groups:
            raise ValueError(f"{team.name}: unknown group {team.group_letter!r}")
        groups[team.group_letter].append(team)

    for letter, members in groups.items():
        if len(members) != config.TEAMS_PER_GROUP:
            raise ValueError(f"Group {letter} has {len(members)} teams, expected {config.TEAMS_PER_GROUP}")
    return groups


def match_id_for(match_number: int) -> str:
    return f"M{match_number:03d}"


def build_schedule(teams: list[Team]) -> list[Match]:
    """Build the full tournament schedule for 48 teams."""
    groups = teams_by_group(teams)
    matches = []
    number = 0

    for matchday in config.GROUP_MATCHDAYS:
        for letter in config.GROUP_LETTERS:
            members = groups[letter]
            for home_pos, away_pos in matchday:
                number += 1
                matches.append(Match(
                    match_id=match_id_for(number),
                    match_number=number,
                    stage=config.GROUP_STAGE,
                    group_letter=letter,
                    home=ConcreteTeam(members[home_pos - 1].team_id),
                    away=ConcreteTeam(members[away_pos - 1].team_id),
                ))

    for number, (home, away) in sorted(config.R32_FIXTURES.items()):
        matches.append(Match(
            match_id=match_id_for(number),
            match_number=number,
            stage=config.ROUND_32,
            home=parse_placeholder(home),
            away=parse_placeholder(away),
        ))

    for number, (stage, home, away) in sorted(config.KNOCKOUT_FEEDS.items()):
        matches.append(Match(
            match_id=match_id_for(number),
            match_number=number,
            stage=stage,
            home=parse_placeholder(home),
            away=parse_placeholder(away),
        ))

    return matches
