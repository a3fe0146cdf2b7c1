"""Group table rows."""

from dataclasses import dataclass

import config
from models.team import Team


@dataclass
class GroupStanding:
    team: Team
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    fair_play: int = 0  # conduct score, 0 or negative

    @property
    def team_id(self) -> str:
        return self.team.team_id

    @property
    def group_letter(self) -> str:
        return self.team.group_letter

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    @property
    def points(self) -> int:
        return self.won * config.POINTS_FOR_WIN + self.drawn * config.POINTS_FOR_DRAW

    def record_result(self, scored: int, conceded: int):
        """Add one match to the row."""
        self.played += 1
        self.goals_for += scored
        self.goals_against += conceded
        if scored > conceded:
            self.won += 1
        elif scored < conceded:
            self.lost += 1
        else:
            self.drawn += 1


@dataclass(frozen=True)
class ThirdPlaceQualifier:
    """A third-placed team in the cross-group ranking."""
    standing: GroupStanding
    rank: int  # 1-12

    @property
    def group_letter(self) -> str:
        return self.standing.group_letter

    @property
    def team(self) -> Team:
        return self.standing.team

    @property
    def qualified(self) -> bool:
        return self.rank <= config.BEST_THIRD_QUALIFIERS
