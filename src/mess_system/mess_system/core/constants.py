"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_MINUTES = 7 * 24 * 60
DEFAULT_HISTORY_LIMIT = 30
WEEKLY_PLAN_DAYS = 7
MIN_PASSWORD_LENGTH = 6
MIN_MEALS_PER_DAY = 1
MAX_MEALS_PER_DAY = 3
