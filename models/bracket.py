"""Resolved bracket data structure.

A BracketResult is what the resolver derives from one set of score entries
(a member's predictions or the actual results):

- group_standings:      group letter -> ordered table (index 0 = winner)
- third_place_ranking:  the 12 third-placed teams ranked against each other
- annex_c_option:       row of the Annex-C table chosen by the 8 qualifying
                        third-place groups (None until 8 groups are known)
- knockout:             match number (73-104) -> Pairing of resolved teams
- outcomes:             match number -> Outcome of that knockout match

Teams that cannot be resolved yet are None. A None never turns into a team
further down the bracket: every match fed by an undetermined match is itself
undetermined.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from models.standing import GroupStanding, ThirdPlaceQualifier
from models.team import Team


class Decision(Enum):
    """How a match winner was determined."""
    BY_SCORE = "score"
    BY_PSO = "pso"
    BY_EXPLICIT_PICK = "explicit_pick"
    UNDETERMINED = "undetermined"


@dataclass(frozen=True)
class Outcome:
    decision: Decision
    winner: Team | None = None
    loser: Team | None = None

    @property
    def is_decided(self) -> bool:
        return self.decision is not Decision.UNDETERMINED


UNDETERMINED = Outcome(Decision.UNDETERMINED)


@dataclass(frozen=True)
class Pairing:
    home: Team | None = None
    away: Team | None = None

    @property
    def is_complete(self) -> bool:
        return self.home is not None and self.away is not None

    def team_ids(self) -> frozenset[str]:
        return frozenset(t.team_id for t in (self.home, self.away) if t is not None)


@dataclass
class BracketResult:
    group_standings: dict[str, list[GroupStanding]] = field(default_factory=dict)
    third_place_ranking: list[ThirdPlaceQualifier] = field(default_factory=list)
    annex_c_option: int | None = None
    qualifying_third_groups: str = ""
    knockout: dict[int, Pairing] = field(default_factory=dict)
    outcomes: dict[int, Outcome] = field(default_factory=dict)
    champion: Team | None = None
    runner_up: Team | None = None
    third_place: Team | None = None
    qualified_team_ids: frozenset[str] = frozenset()

    def pairing(self, match_number: int) -> Pairing:
        """Resolved teams for a knockout match (empty pairing if unknown)."""
        return self.knockout.get(match_number, Pairing())

    def winner_of(self, match_number: int) -> Team | None:
        outcome = self.outcomes.get(match_number)
        return outcome.winner if outcome else None

    def group_winner(self, group_letter: str) -> Team | None:
        table = self.group_standings.get(group_letter, [])
        return table[0].team if table else None

    def group_runner_up(self, group_letter: str) -> Team | None:
        table = self.group_standings.get(group_letter, [])
        return table[1].team if len(table) > 1 else None

    def is_complete(self) -> bool:
        """Check if every knockout match down to the podium has been resolved."""
        return (self.champion is not None and self.runner_up is not None
                and self.third_place is not None)
