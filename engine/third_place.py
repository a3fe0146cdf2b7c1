"""Cross-group ranking of the third-placed teams.

The 12 third-placed teams never meet each other, so head-to-head does not
apply; they are compared on points, goal difference, goals scored, fair-play
score and strength rating, using each team's own group matches only. The top
eight reach the Round of 32.
"""

import config
from engine.standings import ranking_key
from models.standing import GroupStanding, ThirdPlaceQualifier


def rank_third_place_teams(all_group_standings: dict[str, list[GroupStanding]]) -> list[ThirdPlaceQualifier]:
    """Rank every group's third-placed team.

    Args:
        all_group_standings: {group_letter: ordered standings}

    Returns:
        All third-placed teams, best first, with rank 1..n
    """
    thirds = [standings[2] for standings in all_group_standings.values() if len(standings) >= 3]
    thirds.sort(key=ranking_key)
    return [ThirdPlaceQualifier(standing=s, rank=i) for i, s in enumerate(thirds, 1)]


def best_third_place_teams(all_group_standings: dict[str, list[GroupStanding]]) -> list[ThirdPlaceQualifier]:
    """The eight third-placed teams that qualify for the Round of 32."""
    return rank_third_place_teams(all_group_standings)[:config.BEST_THIRD_QUALIFIERS]


def qualifying_combination(qualifiers: list[ThirdPlaceQualifier]) -> str:
    """Canonical Annex-C key: the qualifying group letters, sorted."""
    return "".join(sorted(q.group_letter for q in qualifiers))
