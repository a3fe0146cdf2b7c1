"""
Unit tests for the Annex-C table.
"""
import pandas as pd
import pytest

import config
from engine.annex_c import annex_c_table, load_annex_c, lookup
from engine.errors import StructuralError
from models.match import BestThird


class TestBundledTable:
    """The shipped table covers every combination validly."""

    def test_has_every_combination(self):
        table = annex_c_table()
        assert len(table) == 495

    def test_first_and_last_options(self):
        first = lookup("ABCDEFGH")
        assert first.option == 1
        assert first.slots == {75: "A", 78: "C", 79: "F", 80: "E", 81: "H", 82: "B", 85: "G", 88: "D"}
        assert lookup("EFGHIJKL").option == 495

    def test_lookup_ignores_letter_order(self):
        assert lookup("HGFEDCBA") is lookup("ABCDEFGH")

    def test_unknown_combination(self):
        with pytest.raises(StructuralError):
            lookup("ABCDEFG")

    def test_group_for_respects_slot(self):
        row = lookup("ABCDEFGH")
        assert row.group_for(75, BestThird(frozenset("ABCDF"))) == "A"
        with pytest.raises(StructuralError):
            row.group_for(75, BestThird(frozenset("XYZ")))
        with pytest.raises(StructuralError):
            row.group_for(73, BestThird(frozenset("ABCDF")))


def _write(tmp_path, df):
    path = tmp_path / "annex.csv"
    df.to_csv(path, index=False)
    return str(path)


class TestValidation:
    """Malformed tables are rejected at load."""

    @pytest.fixture
    def bundled(self):
        return pd.read_csv(config.ANNEX_C_PATH, dtype=str)

    def test_bundled_roundtrip(self, tmp_path, bundled):
        assert len(load_annex_c(_write(tmp_path, bundled))) == 495

    def test_missing_row(self, tmp_path, bundled):
        with pytest.raises(StructuralError, match="494"):
            load_annex_c(_write(tmp_path, bundled.iloc[1:]))

    def test_duplicate_row(self, tmp_path, bundled):
        df = pd.concat([bundled, bundled.iloc[[0]]])
        with pytest.raises(StructuralError, match="duplicate"):
            load_annex_c(_write(tmp_path, df))

    def test_group_placed_twice(self, tmp_path, bundled):
        df = bundled.copy()
        df.loc[0, "78"] = "A"
        with pytest.raises(StructuralError, match="exactly once"):
            load_annex_c(_write(tmp_path, df))

    def test_ineligible_placement(self, tmp_path, bundled):
        df = bundled.copy()
        # swap A and C between 75 and 78: 78 does not accept group A
        df.loc[0, "75"], df.loc[0, "78"] = "C", "A"
        with pytest.raises(StructuralError, match="puts 3A into match 78"):
            load_annex_c(_write(tmp_path, df))

    def test_missing_columns(self, tmp_path):
        df = pd.DataFrame({"combo": ["ABCDEFGH"]})
        with pytest.raises(StructuralError, match="columns"):
            load_annex_c(_write(tmp_path, df))


class TestReplacementTable:
    """A replacement table (such as the official one) drives the Round of 32."""

    def test_resolver_uses_replacement(self, tmp_path, schedule, teams, favourites):
        from engine.resolver import resolve_bracket

        df = pd.read_csv(config.ANNEX_C_PATH, dtype=str)
        # another valid placement for ABCDEFGH
        alternative = {"75": "B", "78": "C", "79": "F", "80": "H", "81": "A", "82": "E", "85": "G", "88": "D"}
        for column, group in alternative.items():
            df.loc[0, column] = group
        table = load_annex_c(_write(tmp_path, df))

        bracket = resolve_bracket(schedule, favourites, teams, annex_table=table)
        assert bracket.annex_c_option == 1
        assert bracket.pairing(75).away.team_id == "B3"
        assert bracket.pairing(81).away.team_id == "A3"
        assert resolve_bracket(schedule, favourites, teams).pairing(75).away.team_id == "A3"
