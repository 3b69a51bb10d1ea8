DEFAULT_SCREEN_WIDTH = 800.0   # pixels
DEFAULT_SCREEN_HEIGHT = 600.0  # pixels

# -----------------------
# Bonding
# -----------------------
DEFAULT_BOND_ENERGY = 300.0    # kJ/mol for unknown element pairs
BOND_LENGTH_MIN = 1.0          # angstrom
BOND_LENGTH_SPREAD = 0.5       # length is drawn from [MIN, MIN + SPREAD)
IONIC_MIN_EN_DIFF = 1.7        # ionic bonds need at least this electronegativity gap
COVALENT_MAX_EN_DIFF = 2.0     # covalent bonds become unstable above this gap

# -----------------------
# Hazards
# -----------------------
RADIATION_EXTREME = 9.0
RADIATION_HIGH = 7.0
RADIATION_MODERATE = 4.0

# -----------------------
# Outbreak / Population
# -----------------------
DEFAULT_OUTBREAK_SIZE = 10
MAX_POPULATION = 500
OUTBREAK_REPRODUCTION_RATE = 0.05
OUTBREAK_MUTATION_RATE = 0.15
SPREAD_MIN_DISTANCE = 50.0
SPREAD_DISTANCE_RANGE = 100.0  # spread distance is drawn from [MIN, MIN + RANGE)
HEALTHY_THRESHOLD = 70.0
MAX_OFFSPRING_PER_TICK = 5
OFFSPRING_JITTER = 30          # integer pixel offset in [-JITTER, JITTER)
MOVE_JITTER = 20.0             # per-axis movement scale, multiplied by dt

# -----------------------
# Resistance
# -----------------------
EXPOSURE_RESISTANCE_GAIN = 0.05
EXPOSURE_DAMAGE_THRESHOLD = 10.0
EXPOSURE_RESISTANCE_CAP = 0.95
MUTATION_RESISTANCE_GAIN = 0.1
MUTATION_RESISTANCE_CAP = 1.0

# -----------------------
# Metrics
# -----------------------
DEFAULT_HISTORY_MAXLEN = 2000

# -----------------------
# Logging
# -----------------------
LOGGING_LEVEL = "INFO"  # options: DEBUG, INFO, WARNING, ERROR
