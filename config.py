"""Central configuration for the 48-team tournament bracket engine."""

import os

# Tournament shape
GROUP_LETTERS = ["A", "B", "C", "D", "E", "F", "G", "H", "I", "J", "K", "L"]
TEAMS_PER_GROUP = 4
NUM_TEAMS = len(GROUP_LETTERS) * TEAMS_PER_GROUP  # 48
NUM_MATCHES = 104
BEST_THIRD_QUALIFIERS = 8  # 8 of the 12 third-placed teams reach the Round of 32

# Group table points
POINTS_FOR_WIN = 3
POINTS_FOR_DRAW = 1

# Stages, in bracket order
GROUP_STAGE = "group"
ROUND_32 = "round_32"
ROUND_16 = "round_16"
QUARTER_FINAL = "quarter_final"
SEMI_FINAL = "semi_final"
THIRD_PLACE = "third_place"
FINAL = "final"

KNOCKOUT_STAGES = [ROUND_32, ROUND_16, QUARTER_FINAL, SEMI_FINAL, THIRD_PLACE, FINAL]
STAGES = [GROUP_STAGE] + KNOCKOUT_STAGES

STAGE_LABELS = {
    GROUP_STAGE: "Group Stage",
    ROUND_32: "Round of 32",
    ROUND_16: "Round of 16",
    QUARTER_FINAL: "Quarter Finals",
    SEMI_FINAL: "Semi Finals",
    THIRD_PLACE: "Third Place",
    FINAL: "Final",
    "finals": "Third Place & Final",
}

STAGE_SHORT_NAMES = {
    ROUND_32: "R32",
    ROUND_16: "R16",
    QUARTER_FINAL: "QF",
    SEMI_FINAL: "SF",
    THIRD_PLACE: "3rd Place",
    FINAL: "Final",
}

MATCH_STATUSES = ["scheduled", "live", "completed", "cancelled"]

# Fair-play deductions per card category (FIFA conduct score)
FAIR_PLAY_DEDUCTIONS = {
    "yellow_cards": -1,
    "indirect_red_cards": -3,       # second yellow
    "direct_red_cards": -4,
    "yellow_direct_red_cards": -5,  # yellow followed by a direct red
}

# Round of 32 fixtures: match number -> (home slot, away slot)
R32_FIXTURES = {
    73: ("Runner-up Group A", "Runner-up Group B"),
    74: ("Winner Group C", "Runner-up Group F"),
    75: ("Winner Group E", "3rd Place Group A/B/C/D/F"),
    76: ("Winner Group F", "Runner-up Group C"),
    77: ("Runner-up Group E", "Runner-up Group I"),
    78: ("Winner Group I", "3rd Place Group C/D/F/G/H"),
    79: ("Winner Group A", "3rd Place Group C/E/F/H/I"),
    80: ("Winner Group L", "3rd Place Group E/H/I/J/K"),
    81: ("Winner Group G", "3rd Place Group A/E/H/I/J"),
    82: ("Winner Group D", "3rd Place Group B/E/F/I/J"),
    83: ("Winner Group H", "Runner-up Group J"),
    84: ("Runner-up Group K", "Runner-up Group L"),
    85: ("Winner Group B", "3rd Place Group E/F/G/I/J"),
    86: ("Runner-up Group D", "Runner-up Group G"),
    87: ("Winner Group J", "Runner-up Group H"),
    88: ("Winner Group K", "3rd Place Group D/E/I/J/L"),
}

# Later rounds: match number -> (stage, home slot, away slot)
KNOCKOUT_FEEDS = {
    89: (ROUND_16, "Winner Match 74", "Winner Match 77"),
    90: (ROUND_16, "Winner Match 73", "Winner Match 75"),
    91: (ROUND_16, "Winner Match 76", "Winner Match 78"),
    92: (ROUND_16, "Winner Match 79", "Winner Match 80"),
    93: (ROUND_16, "Winner Match 83", "Winner Match 84"),
    94: (ROUND_16, "Winner Match 81", "Winner Match 82"),
    95: (ROUND_16, "Winner Match 86", "Winner Match 88"),
    96: (ROUND_16, "Winner Match 85", "Winner Match 87"),
    97: (QUARTER_FINAL, "Winner Match 89", "Winner Match 90"),
    98: (QUARTER_FINAL, "Winner Match 93", "Winner Match 94"),
    99: (QUARTER_FINAL, "Winner Match 91", "Winner Match 92"),
    100: (QUARTER_FINAL, "Winner Match 95", "Winner Match 96"),
    101: (SEMI_FINAL, "Winner Match 97", "Winner Match 98"),
    102: (SEMI_FINAL, "Winner Match 99", "Winner Match 100"),
    103: (THIRD_PLACE, "Loser Match 101", "Loser Match 102"),
    104: (FINAL, "Winner Match 101", "Winner Match 102"),
}

# Round-robin order inside a group, by seeding position (1-4), one tuple per matchday
GROUP_MATCHDAYS = [
    [(1, 2), (3, 4)],
    [(1, 3), (4, 2)],
    [(4, 1), (2, 3)],
]

# Default pool scoring (a brand new pool starts with these)
DEFAULT_GROUP_POINTS = {"exact": 5, "winner_gd": 3, "winner": 1}
DEFAULT_KNOCKOUT_POINTS = {"exact": 5, "winner_gd": 3, "winner": 1}

DEFAULT_BONUS_POINTS = {
    "group_winner_and_runnerup": 150,
    "group_winner_only": 100,
    "group_runnerup_only": 50,
    "both_qualify_swapped": 75,
    "one_qualifies_wrong_position": 25,
    "all_qualified": 75,
    "qualified_75pct": 50,
    "qualified_50pct": 25,
    "correct_bracket_pairing": 25,
    "match_winner_correct": 50,
    "champion_correct": 1000,
    "second_place_correct": 25,
    "third_place_correct": 25,
}

# Overall qualification tiers (share of the 32 actual qualifiers)
QUALIFICATION_TIERS = {"qualified_75pct": 0.75, "qualified_50pct": 0.5}

# Data locations
DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")
ANNEX_C_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "engine", "data", "annex_c.csv")
