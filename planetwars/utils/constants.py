"""Game configuration defaults."""

# Board dimensions
BOARD_WIDTH = 640
BOARD_HEIGHT = 480

# Planet configuration
NUM_PLANETS = 10
INITIAL_NEUTRAL_RATIO = 0.3
GROWTH_RATE_RANGE = (0.05, 0.2)  # Ships per tick while owned
INITIAL_SHIPS_RANGE = (5.0, 20.0)

# Map generation
EDGE_SEPARATION = 25.0  # Minimum distance from a board edge
RADIAL_SEPARATION = 1.5  # Multiple of summed radii kept between planets
GROWTH_TO_RADIUS_FACTOR = 200.0

# Movement
TRANSPORTER_SPEED = 3.0  # Distance units per tick

# Match length
MAX_TICKS = 2000

# Smallest ship quantity a launch may carry
EPSILON = 1e-6
