"""Game constants and configuration."""

# Player limits
MIN_PLAYERS = 1
MAX_PLAYERS = 50

# Group size thresholds used for edge case warnings
SMALL_GROUP_SIZE = 3  # Fewer players than this lacks social dynamics
LARGE_GROUP_SIZE = 30  # More players than this crowds the reveal screen

# Player name limits
MAX_NAME_LENGTH = 20

# Version tag stamped into every assignment's metadata
ASSIGNMENT_VERSION = "2.0"

# Reveal session cleanup
SESSION_TTL_SECONDS = 3600  # Sessions are cleaned up after 1 hour

# Role ids of the built-in catalog
MAFIA = "MAFIA"
POLICE = "POLICE"
DOCTOR = "DOCTOR"
VILLAGER = "VILLAGER"
