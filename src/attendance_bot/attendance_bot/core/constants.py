"""Constants and defaults.

Note: settings modules may override the work-rule values; these are the
fallbacks used when a setting is missing.
"""

DEFAULT_TIMEZONE = "Asia/Taipei"

DEFAULT_STANDARD_SHIFT_HOURS = 9
DEFAULT_BREAK_START = "12:00"
DEFAULT_BREAK_END = "13:00"
DEFAULT_OVERTIME_MIN_MINUTES = 30
DEFAULT_OVERTIME_MULTIPLIER = "1.33"

DEFAULT_HOURLY_BREAK_THRESHOLD_MINUTES = 301
DEFAULT_HOURLY_BREAK_MINUTES = 60

DEFAULT_SPECIAL_LEAVE_LABEL = "special"

# (months of service, days): the highest threshold reached applies.
DEFAULT_SPECIAL_LEAVE_TABLE = (
    (6, 3),
    (12, 7),
    (24, 10),
    (36, 14),
    (60, 15),
    (120, 16),
)

DEFAULT_REPORT_PREVIEW_LIMIT = 3800
DEFAULT_MAX_LEAVE_RANGE_DAYS = 62
DEFAULT_HOLIDAY_REFRESH_HOURS = 24

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
