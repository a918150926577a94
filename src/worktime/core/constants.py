"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MS_PER_MINUTE = 60 * 1000
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR

DEFAULT_HOURS_LIMIT = 40
DEFAULT_FETCH_BATCH_SIZE = 50

# [start, end) hour windows used to detect a night shift
DEFAULT_NIGHT_START_WINDOW = (21, 23)
DEFAULT_NIGHT_END_WINDOW = (5, 7)
