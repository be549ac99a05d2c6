"""Game-wide tuning constants."""

SEED = 42

CELL_MIN_SIZE = 25
CELL_MAX_SPEED = 300
CELL_SPLIT_MINIMUM = 50
SPLIT_DECELERATION = 80

FOOD_SPEED = 100
FOOD_DECEL = 80

RECOMBINE_TIMER_SEC = 10

# a cell must be this many times heavier than another ball to eat it
CELL_EAT_MARGIN = 1.1

MASS_AREA_RATIO = 1.0

# approximate factor by which a cell shrinks when it hits a virus
CELL_POP_REDUCTION = 2
CELL_POP_SIZE = 25

DEFAULT_ARENA_WIDTH = 350
DEFAULT_ARENA_HEIGHT = 350

DEFAULT_NUM_PELLETS = 1024
DEFAULT_NUM_VIRUSES = 25
PLAYER_CELL_LIMIT = 14

NUM_CELLS_TO_SPLIT = PLAYER_CELL_LIMIT
MIN_CELL_SPLIT_MASS = 130

PLAYER_RATE = 0.002
DECAY_FOR_NUM_SECONDS = 1

NUMBER_OF_FOOD_HITS = 7

MAX_MASS_IN_THE_GAME = 22500
NEW_MASS_IF_NO_SPLIT = 22000

ANTI_TEAM_ACTIVATION_TIME = 60
NUM_VIRUSES_TO_EAT = 3