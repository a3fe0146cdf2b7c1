"""Pool scoring configuration from JSON.

Any field of ScoringConfig may be given; missing fields keep their defaults.
Set a bonus to null to switch that category off for the pool:

    {
        "group_exact_score": 100,
        "knockout_exact_score": 200,
        "final_multiplier": 8,
        "pso_enabled": true,
        "bonus_third_place_correct": null
    }
"""

import dataclasses
import json
import os

from models.scoring import ScoringConfig


def settings_from_dict(data: dict) -> ScoringConfig:
    """Build a ScoringConfig, rejecting unknown keys."""
    known = set(ScoringConfig.field_names())
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown scoring setting(s): {', '.join(unknown)}")
    return ScoringConfig(**data)


def load_settings_from_json(filepath: str) -> ScoringConfig:
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)
    settings = settings_from_dict(data)
    print(f"Loaded scoring settings from {filepath}")
    return settings


def save_settings_to_json(settings: ScoringConfig, filepath: str):
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(dataclasses.asdict(settings), f, indent=2)
    print(f"Saved scoring settings to {filepath}")
