POSITIONS = ("QB", "RB", "WR", "TE", "K", "DEF")
FLEX_ELIGIBLE_POSITIONS = {"RB", "WR", "TE"}

# Flexible roster slots; "W/R/T" is treated as another FLEX slot
FLEX_SLOT_KEYS = ("FLEX", "W/R/T")
SUPERFLEX_SLOT_KEY = "SUPERFLEX"
NON_POSITION_SLOT_KEYS = FLEX_SLOT_KEYS + (SUPERFLEX_SLOT_KEY, "BENCH")

DRAFT_TYPES = ("snake", "linear")
SCORING_FORMATS = ("full_ppr", "half_ppr", "standard", "custom")

# Default roster configuration
DEFAULT_ROSTER_SLOTS = {
    "QB": 1,
    "RB": 2,
    "WR": 2,
    "TE": 1,
    "FLEX": 1,
    "DEF": 1,
    "K": 1,
    "BENCH": 6,
}

# Default league settings
DEFAULT_LEAGUE_SIZE = 12
DEFAULT_NUMBER_OF_ROUNDS = 15
DEFAULT_SCORING_FORMAT = "half_ppr"
DEFAULT_DRAFT_TYPE = "snake"

# Minimum depth an opponent is assumed to chase once starters are filled
OPPONENT_DEPTH_TARGETS = {
    "QB": 1,
    "RB": 3,
    "WR": 3,
    "TE": 2,
}

# A position counts as a strength once filled to this share of its slots
STRENGTH_FILL_RATIO = 1.5
STRENGTH_MIN_AVERAGE_VORP = 5.0
