"""Annex C lookup.

The Round of 32 places the eight best third-placed teams according to a fixed,
pre-published table. For each of the C(12, 8) = 495 possible sets of groups
that can supply a qualifying third-placed team, the table says which group's
third-placed team plays in each of the eight "best third" fixtures.

The table is reference data (engine/data/annex_c.csv), one row per
combination:

    option,combination,75,78,79,80,81,82,85,88
    1,ABCDEFGH,A,C,F,E,H,B,G,D

It is validated when loaded and never computed at resolution time.
"""

from dataclasses import dataclass
from functools import lru_cache
from itertools import combinations

import pandas as pd

import config
from engine.errors import StructuralError
from models.match import BestThird, parse_placeholder


@dataclass(frozen=True)
class AnnexCRow:
    option: int
    combination: str
    slots: dict[int, str]  # R32 match number -> group letter of the third-placed team

    def group_for(self, match_number: int, slot: BestThird) -> str:
        """Group whose third-placed team fills a best-third slot."""
        group = self.slots.get(match_number)
        if group is None:
            raise StructuralError(
                f"Annex C option {self.option} has no third-place slot for match {match_number}")
        if group not in slot.groups:
            raise StructuralError(
                f"Annex C option {self.option} puts 3{group} into match {match_number}, "
                f"which only accepts {slot}")
        return group


def load_annex_c(filepath: str = config.ANNEX_C_PATH) -> dict[str, AnnexCRow]:
    """Load and validate the Annex-C table.

    Returns:
        {combination: AnnexCRow}, keyed by the sorted 8-letter combination

    Raises:
        StructuralError: if the table does not cover exactly the 495
            8-of-12 combinations with a valid assignment for each
    """
    df = pd.read_csv(filepath, dtype=str)
    if "combination" not in df.columns or "option" not in df.columns:
        raise StructuralError(f"{filepath}: expected 'option' and 'combination' columns")

    slot_columns = [c for c in df.columns if c not in ("option", "combination")]
    table: dict[str, AnnexCRow] = {}

    for _, row in df.iterrows():
        combination = row["combination"].strip()
        if combination in table:
            raise StructuralError(f"{filepath}: duplicate combination {combination}")
        slots = {int(col): row[col].strip() for col in slot_columns}
        if sorted(slots.values()) != sorted(combination):
            raise StructuralError(
                f"{filepath}: option {row['option']} does not place each of {combination} exactly once")
        table[combination] = AnnexCRow(option=int(row["option"]), combination=combination, slots=slots)

    expected = {"".join(c) for c in combinations(config.GROUP_LETTERS, config.BEST_THIRD_QUALIFIERS)}
    if set(table) != expected:
        missing = len(expected - set(table))
        extra = len(set(table) - expected)
        raise StructuralError(
            f"{filepath}: expected {len(expected)} combinations, "
            f"got {len(table)} ({missing} missing, {extra} unexpected)")

    _check_against_fixtures(table, filepath)
    return table


def _check_against_fixtures(table: dict[str, AnnexCRow], filepath: str):
    """Every placement must respect the candidate groups printed on the fixture."""
    eligible = {}
    for match_number, (home, away) in config.R32_FIXTURES.items():
        for text in (home, away):
            slot = parse_placeholder(text)
            if isinstance(slot, BestThird):
                eligible[match_number] = slot

    for row in table.values():
        if set(row.slots) != set(eligible):
            raise StructuralError(
                f"{filepath}: option {row.option} covers matches {sorted(row.slots)}, "
                f"expected {sorted(eligible)}")
        for match_number, group in row.slots.items():
            if group not in eligible[match_number].groups:
                raise StructuralError(
                    f"{filepath}: option {row.option} puts 3{group} into match {match_number}")


@lru_cache(maxsize=None)
def annex_c_table() -> dict[str, AnnexCRow]:
    """The bundled table, loaded once per process."""
    return load_annex_c()


def lookup(combination: str, table: dict[str, AnnexCRow] | None = None) -> AnnexCRow:
    """Find the Annex-C row for a set of qualifying third-place groups.

    Args:
        combination: the 8 qualifying group letters, in any order
        table: optional table to search instead of the bundled one

    Raises:
        StructuralError: if no row exists for the combination
    """
    if table is None:
        table = annex_c_table()
    key = "".join(sorted(combination))
    row = table.get(key)
    if row is None:
        raise StructuralError(f"No Annex C entry for third-place combination {key!r}")
    return row
