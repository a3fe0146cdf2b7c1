"""Match data model.

Every match has two slots. A slot is either a concrete team (group stage) or a
typed reference that the bracket resolver dereferences:

- WinnerOf / LoserOf:  the winner or loser of an earlier match
- GroupPosition:       the winner (rank 1) or runner-up (rank 2) of a group
- BestThird:           one of the eight best third-placed teams, drawn from a
                       set of candidate groups (Annex C decides which one)

Placeholder text such as "Winner Match 74" or "3rd Place Group A/B/C/D/F" is
parsed into these types once, when the schedule is built.

Once the actual teams are known, advancement records them in a knockout match's
home_team_id / away_team_id. The slots are never overwritten, so a member's
bracket can still be derived from their own predictions.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import config
from engine.errors import StructuralError


@dataclass(frozen=True)
class ConcreteTeam:
    team_id: str

    def __str__(self):
        return self.team_id


@dataclass(frozen=True)
class WinnerOf:
    match_number: int

    def __str__(self):
        return f"Winner Match {self.match_number}"


@dataclass(frozen=True)
class LoserOf:
    match_number: int

    def __str__(self):
        return f"Loser Match {self.match_number}"


@dataclass(frozen=True)
class GroupPosition:
    group: str
    rank: int  # 1 = winner, 2 = runner-up

    def __str__(self):
        label = "Winner" if self.rank == 1 else "Runner-up"
        return f"{label} Group {self.group}"


@dataclass(frozen=True)
class BestThird:
    groups: frozenset[str]

    def __str__(self):
        return "3rd Place Group " + "/".join(sorted(self.groups))


Slot = ConcreteTeam | WinnerOf | LoserOf | GroupPosition | BestThird

_WINNER_MATCH = re.compile(r"^(?:winner\s+(?:of\s+)?match\s*|w\s*)(\d+)$", re.IGNORECASE)
_LOSER_MATCH = re.compile(r"^(?:loser\s+(?:of\s+)?match\s*|l\s*)(\d+)$", re.IGNORECASE)
_GROUP_POSITION = re.compile(r"^(?:(winner|runner-up)\s+group\s+([a-l])|([12])([a-l]))$", re.IGNORECASE)
_BEST_THIRD = re.compile(r"^(?:3rd\s+place\s+group\s+([a-l](?:\s*/\s*[a-l])*)|3([a-l]+))$", re.IGNORECASE)


def parse_placeholder(text: str) -> Slot:
    """Parse placeholder text into a typed slot.

    Accepts the long form used on the official schedule ("Winner Match 74",
    "Loser Match 101", "Winner Group A", "Runner-up Group C",
    "3rd Place Group A/B/C/D/F") and the short form used on bracket
    graphics ("W74", "L101", "1A", "2C", "3ABCDF").

    Raises:
        StructuralError: if the text matches none of the forms
    """
    cleaned = " ".join(str(text).split())

    m = _WINNER_MATCH.match(cleaned)
    if m:
        return WinnerOf(int(m.group(1)))

    m = _LOSER_MATCH.match(cleaned)
    if m:
        return LoserOf(int(m.group(1)))

    m = _GROUP_POSITION.match(cleaned)
    if m:
        if m.group(1):
            rank = 1 if m.group(1).lower() == "winner" else 2
            return GroupPosition(m.group(2).upper(), rank)
        return GroupPosition(m.group(4).upper(), int(m.group(3)))

    m = _BEST_THIRD.match(cleaned)
    if m:
        letters = m.group(1) or m.group(2)
        groups = frozenset(ch.upper() for ch in letters if ch.isalpha())
        return BestThird(groups)

    raise StructuralError(f"Unparsable placeholder: {text!r}")


def parse_slot(text: str, team_ids=()) -> Slot:
    """Parse a slot that may hold either a known team id or a placeholder."""
    text = str(text).strip()
    if text in team_ids:
        return ConcreteTeam(text)
    return parse_placeholder(text)


@dataclass(frozen=True)
class Match:
    match_id: str
    match_number: int
    stage: str
    home: Slot
    away: Slot
    group_letter: str | None = None
    # Teams written into knockout slots by advancement; the slots keep their placeholders
    home_team_id: str | None = None
    away_team_id: str | None = None
    status: str = "scheduled"
    home_score: int | None = None
    away_score: int | None = None
    home_pso: int | None = None
    away_pso: int | None = None
    winner_team_id: str | None = None
    completed_at: str | None = None

    def __post_init__(self):
        if self.stage not in config.STAGES:
            raise ValueError(f"Unknown stage {self.stage!r} for match {self.match_number}")
        if self.status not in config.MATCH_STATUSES:
            raise ValueError(f"Unknown status {self.status!r} for match {self.match_number}")

    @property
    def is_group_stage(self) -> bool:
        return self.stage == config.GROUP_STAGE

    @property
    def is_knockout(self) -> bool:
        return self.stage != config.GROUP_STAGE

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"

    @property
    def has_result(self) -> bool:
        """True if the match is completed and has a full-time score."""
        return self.is_completed and self.home_score is not None and self.away_score is not None

    @property
    def went_to_penalties(self) -> bool:
        return self.home_pso is not None and self.away_pso is not None

    def __str__(self):
        return f"Match {self.match_number}: {self.home} vs {self.away}"
