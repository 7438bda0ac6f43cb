GRID_SIZE = 6

# Number of tile types dealt per board. Fewer types = more tiles per type = more matches.
# 8 gives roughly 4-5 tiles per type on a 6x6 board.
CANDY_TYPES_PER_GAME = 8

# Fixed test seeds: each loads a fixed block of catalog types so a board can be replayed.
# 1111 = ids 1-5, 2222 = ids 6-10, 3333 = ids 11-15, 4444 = ids 16-20.
TEST_SEEDS = (1111, 2222, 3333, 4444)
TYPES_PER_TEST_SEED = 5

# Seeds drawn for ordinary play when none is requested.
RANDOM_SEED_MIN = 1000
RANDOM_SEED_POOL_SIZE = 1000

# Minimum number of valid swaps a dealt board must offer.
MIN_VALID_MOVES = 12

# Generation budgets.
MAX_SEED_ATTEMPTS = 120
MAX_NUDGES = 200
MAX_PLACEMENT_RETRIES = 100
MAX_CASCADE_STEPS = 100

# Round rules.
GAME_TIME = 45  # seconds
SCORE_PER_MATCH = 10  # points per cleared tile

# Pixels a drag must travel before it counts as a swipe.
DRAG_THRESHOLD = 30
