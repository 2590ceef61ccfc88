"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_GRACE_PERIOD_MINUTES = 15
DEFAULT_HISTORY_LIMIT = 30
MINUTES_PER_DAY = 24 * 60
NO_SCHEDULE_REASON = "no schedule for this day in this classroom"
