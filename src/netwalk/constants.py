DEFAULT_WIDTH = 7
DEFAULT_HEIGHT = 7

# Inclusive bounds accepted for either board dimension.
MIN_BOARD_SIZE = 1
MAX_BOARD_SIZE = 64

# Scramble draws a clockwise quarter-turn count from range(SCRAMBLE_TURN_CHOICES).
SCRAMBLE_TURN_CHOICES = 3

SEED_BYTES = 32
SEED_HEX_LENGTH = SEED_BYTES * 2
