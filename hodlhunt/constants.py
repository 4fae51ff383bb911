"""Game-wide constants: ocean cycle timing, fee schedule and hunting-mark windows."""

U64_MAX = (1 << 64) - 1

# Ocean cycle
DAY_DURATION = 24 * 60 * 60
CALM_FEEDING_BPS = 500  # 5%
STORM_FEEDING_BPS = 1000  # 10%
INITIAL_STORM_PROBABILITY_BPS = 350  # rolled against a 0..999 range, i.e. 35%

# Fees
MIN_DEPOSIT_LAMPORTS = 10_000_000  # 0.01 SOL
MIN_FEED_LAMPORTS = 10_000_000  # 0.01 SOL
FEED_COMMISSION_DIVISOR = 10  # 10%
FEE_SPLIT_DIVISOR = 2  # 50/50
CREATION_FEE_DIVISOR = 20  # 5% of the deposit
BASIS_POINTS_DIVISOR = 10_000
EXIT_FEE_BPS = 500  # 5%

# Hunting marks
PLACEMENT_WINDOW_SECONDS = 24 * 60 * 60
HIGH_RATE_THRESHOLD_SECONDS = 3 * 60 * 60
EXCLUSIVITY_SECONDS = 30 * 60