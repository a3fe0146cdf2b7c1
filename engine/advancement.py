"""Advancement planning.

Works out which team belongs in every knockout slot given the actual results
so far, and records the plan on the schedule. Assigned teams go into each
knockout match's home_team_id / away_team_id; the placeholder slots are left
alone so members' brackets keep resolving from their own predictions. Slots
planned as None are cleared (for example after a result has been reset).
"""

import dataclasses
from dataclasses import dataclass

import config
from engine.annex_c import AnnexCRow
from engine.resolver import resolve_bracket
from models.match import Match
from models.prediction import ConductRecord, build_actual_results
from models.team import Team


@dataclass(frozen=True)
class SlotAssignment:
    match_number: int
    side: str  # "home" or "away"
    team_id: str | None
    team_name: str | None = None


def plan_advancement(matches: list[Match], teams: list[Team],
                     conduct: list[ConductRecord] | None = None,
                     annex_table: dict[str, AnnexCRow] | None = None) -> list[SlotAssignment]:
    """Team that should occupy each knockout slot, from actual results.

    Round of 32 slots are only filled once the whole group stage is completed;
    until then the group tables are provisional.
    """
    actual = resolve_bracket(matches, build_actual_results(matches), teams, conduct, annex_table)
    group_matches = [m for m in matches if m.is_group_stage]
    groups_done = bool(group_matches) and all(m.is_completed for m in group_matches)

    plan = []
    knockout = sorted((m for m in matches if m.is_knockout), key=lambda m: m.match_number)
    for match in knockout:
        pairing = actual.pairing(match.match_number)
        for side, team in (("home", pairing.home), ("away", pairing.away)):
            if match.stage == config.ROUND_32 and not groups_done:
                team = None
            plan.append(SlotAssignment(
                match_number=match.match_number,
                side=side,
                team_id=team.team_id if team else None,
                team_name=team.name if team else None,
            ))
    return plan


def apply_advancement(matches: list[Match], plan: list[SlotAssignment]) -> list[Match]:
    """Copy of the schedule with the planned teams assigned to knockout matches.

    Every knockout match in the plan gets both sides set, including None, so
    stale assignments are cleared. Matches not in the plan are returned as is.
    """
    assigned: dict[int, dict[str, str | None]] = {}
    for a in plan:
        assigned.setdefault(a.match_number, {})[f"{a.side}_team_id"] = a.team_id

    updated = []
    for m in matches:
        sides = assigned.get(m.match_number)
        if m.is_knockout and sides:
            m = dataclasses.replace(m, **sides)
        updated.append(m)
    return updated


def changed_slots(matches: list[Match], plan: list[SlotAssignment]) -> list[SlotAssignment]:
    """Plan entries that differ from what the schedule currently holds."""
    by_number = {m.match_number: m for m in matches}
    changes = []
    for a in plan:
        match = by_number.get(a.match_number)
        if match is None:
            continue
        if getattr(match, f"{a.side}_team_id") != a.team_id:
            changes.append(a)
    return changes
