"""
Engine constants
"""

# Time units
SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400

# Deadline resolution
DUE_SOON_HORIZON_SECONDS = SECONDS_PER_DAY  # "due soon" = within the next 24 hours

# Range filter
LONG_RANGE_DAYS = 365  # windows this long include every recurring task without a day scan

# Metrics
MOST_ACTIVE_LIMIT = 5

# Recurrence
WEEKDAY_INDICES = range(0, 7)  # 0: Sunday ... 6: Saturday
WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# Window shortcuts
SHORTCUT_TODAY = "today"
SHORTCUT_MONTH = "month"
SHORTCUT_THREE_MONTHS = "3months"
SHORTCUT_YEAR = "year"
WINDOW_SHORTCUTS = [SHORTCUT_TODAY, SHORTCUT_MONTH, SHORTCUT_THREE_MONTHS, SHORTCUT_YEAR]

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "task_engine.log"
