"""Regenerate engine/data/annex_c.csv.

For every set of 8 groups (out of 12) that can supply a qualifying
third-placed team, assign each of those groups to one of the eight "best
third" Round of 32 fixtures, respecting the candidate groups printed on each
fixture (config.R32_FIXTURES).

Combinations are listed in lexicographic order (option 1 = ABCDEFGH). Within a
combination, fixtures are filled in match-number order and each takes the
alphabetically first group that still leaves a complete assignment.

The output is versioned reference data; replace it with the official table
when the organiser publishes a revision, keeping the same columns.

Usage:
    python scripts/generate_annex_c.py [--output path.csv]
"""

import argparse
import os
import sys
from itertools import combinations

import pandas as pd

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), ".."))

import config
from models.match import BestThird, parse_placeholder


def third_place_fixtures() -> list[tuple[int, frozenset[str]]]:
    """(match number, candidate groups) for every best-third slot, by match number."""
    fixtures = []
    for match_number, slots in sorted(config.R32_FIXTURES.items()):
        for text in slots:
            slot = parse_placeholder(text)
            if isinstance(slot, BestThird):
                fixtures.append((match_number, slot.groups))
    return fixtures


def assign(combination: tuple[str, ...], fixtures) -> list[str] | None:
    """Backtracking assignment of qualifying groups to fixtures."""
    assignment: list[str] = []
    used: set[str] = set()

    def place(i: int) -> bool:
        if i == len(fixtures):
            return True
        _, candidates = fixtures[i]
        for group in combination:
            if group in used or group not in candidates:
                continue
            used.add(group)
            assignment.append(group)
            if place(i + 1):
                return True
            used.discard(group)
            assignment.pop()
        return False

    return assignment if place(0) else None


def build_table() -> pd.DataFrame:
    fixtures = third_place_fixtures()
    rows = []
    for combination in combinations(config.GROUP_LETTERS, config.BEST_THIRD_QUALIFIERS):
        groups = assign(combination, fixtures)
        if groups is None:
            raise RuntimeError(f"No valid assignment for {''.join(combination)}")
        row = {"option": len(rows) + 1, "combination": "".join(combination)}
        for (match_number, _), group in zip(fixtures, groups):
            row[str(match_number)] = group
        rows.append(row)
    return pd.DataFrame(rows)


def main():
    parser = argparse.ArgumentParser(description="Regenerate the Annex C table")
    parser.add_argument("--output", default=config.ANNEX_C_PATH)
    args = parser.parse_args()

    df = build_table()
    df.to_csv(args.output, index=False)
    print(f"Wrote {len(df)} combinations to {args.output}")


if __name__ == "__main__":
    main()
