"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MANILA_TZ_ID = "Asia/Manila"
MANILA_OFFSET_HOURS = 8

MINUTES_PER_DAY = 24 * 60
NOON_MINUTES = 12 * 60
# Legacy single time-out after this minute counts against the afternoon end.
LEGACY_OUT_SPLIT_MINUTES = 13 * 60

# Fixed lateness rule used by punch aggregation (08:00 + 15 minutes).
WORK_START_HOUR = 8
LATE_GRACE_MINUTES = 15

DEFAULT_PAGE_LIMIT = 10

EMPTY_DISPLAY = "-"
