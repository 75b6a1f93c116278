"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

UNKNOWN_LABEL = "Unknown"

DEFAULT_DAILY_WINDOW = 7
DEFAULT_MONTHLY_WINDOW = 6
DEFAULT_EARNINGS_DAILY_WINDOW = 30
DEFAULT_TOP_WORKERS = 5
DEFAULT_CHART_WORKERS = 10
DEFAULT_DISTRIBUTION_TOP_K = 8
DEFAULT_JOB_DISTRIBUTION_TOP_K = 5
DEFAULT_RECENT_LIMIT = 10
DEFAULT_ALERT_LIMIT = 5

# Check-in hour boundaries for shift analysis: [start, end)
MORNING_SHIFT_HOURS = (6, 14)
EVENING_SHIFT_HOURS = (14, 22)

# A job entry taking more than this multiple of its expected hours is flagged.
OVERRUN_ALERT_FACTOR = 1.2

# Balances below this many days count as "low" on the leave dashboard.
LOW_LEAVE_BALANCE_DAYS = 2

AVERAGE_DAYS_PER_MONTH = 365.25 / 12

# Fixed goals shown on the job-entry dashboard's targets panel.
DAILY_EARNINGS_TARGET = 50000.0
WEEKLY_EARNINGS_TARGET = 300000.0
DAILY_HOURS_TARGET = 80.0
WEEKLY_HOURS_TARGET = 500.0

# Leave days per year treated as full utilisation by the HR performance score.
ANNUAL_LEAVE_ALLOWANCE_DAYS = 30

NO_RECENT_ACTIVITY = "No recent activity"
AVAILABLE_LABEL = "Available"
NONE_LABEL = "None"
