# Team Constants
MAX_TEAM_SIZE = 4

# Handicap Constants
SLOPE_BASELINE = 113  # Slope rating of a course of standard difficulty
HOLES_PER_ROUND = 18
DEFAULT_HOLE_PAR = 4

# Group Identifier Constants
SINGLETON_GROUP_PREFIX = "single:"
SPLIT_GROUP_SEPARATOR = "#"

# Payout Constants
DEFAULT_PAID_PLACES = 3
PAYOUT_SCHEDULES = {
    1: [1.0],
    2: [0.6, 0.4],
    3: [0.5, 0.3, 0.2],
    4: [0.4, 0.3, 0.2, 0.1],
    5: [0.35, 0.25, 0.18, 0.12, 0.10],
}
TAPER_FIRST_SHARE = 0.35
TAPER_DECAY = 0.7
TAPER_MIN_SHARE = 0.05
PAYOUT_ROUNDING_STEPS = (10, 5)

# Seed Constants
SEED_MASK = 0xFFFFFFFF

# Setup Defaults
DEFAULT_COURSE_NAME = "Home Course"
DEFAULT_PAR = 72
DEFAULT_SLOPES = {"white": 120, "blue": 122, "red": 121}
DEFAULT_ENTRY_FEE = 20
DEFAULT_SKINS_FEE = 5
MIN_PLAYERS_FOR_GAME = 2

# Registry Constants
REGISTRY_SEARCH_LIMIT = 10

# Roster Table Columns
COL_FIRST_NAME = "First Name"
COL_LAST_NAME = "Last Name"
COL_HANDICAP_INDEX = "Handicap Index"
COL_TEE = "Tee"
COL_LINK_GROUP = "Link Group"
COL_PLAYER_ID = "player_id"
ROSTER_REQUIRED_COLUMNS = [COL_FIRST_NAME, COL_HANDICAP_INDEX, COL_TEE]
