# History
NUM_HISTORY_ENTRIES = 256

# Probing
PING_TIMEOUT_MS = 3000
PING_INTERVAL_MS = 1000
PING_PAYLOAD = b"a" * 32

# Anything at or below this is drawn green, above it red.
MAX_GREEN_PING_MS = 50

# uint32 max, same as an unsigned "infinity" for the running minimum.
MIN_TIME_SENTINEL = 2**32 - 1

# Display (log scale)
LOG_SCALE = 95.0
MAX_Y = 350
GRID_LINES_MS = [1, 10, 100, 1000, 10000]

COLOR_FAST = (64, 192, 64, 220)
COLOR_SLOW = (230, 64, 64, 220)
COLOR_FAILURE = (0, 0, 0, 255)
COLOR_FAILURE_DARK = (160, 160, 160, 255)
COLOR_GRID_MINOR = (32, 32, 200, 190)

# Result log
LOG_DIR_NAME = "pingLog"
LOG_HEADER = ["Date", "Time", "Host", "Success", "PingTime", "Ttl"]
