"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 1440
MAX_TIME_OF_DAY = MINUTES_PER_DAY - 1
MONTHS_PER_YEAR = 12

DEFAULT_BATCH_MAX_WORKERS = 4
MAX_SHIFT_ALTERNATIVES = 6
