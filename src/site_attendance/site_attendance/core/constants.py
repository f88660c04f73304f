"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

LUNCH_DEDUCTION_HOURS = 1.0
NORMAL_HOURS_THRESHOLD = 8.0
MEAL_SUGGESTION_OT_HOURS = 2.0
FIXED_DEFAULT_NORMAL_HOURS = 8.0

OT_MULTIPLIER_NORMAL = 1.5
OT_MULTIPLIER_HOLIDAY = 2.0

# MOM: hourly basic rate = (12 x monthly basic) / (52 x 44)
MOM_MONTHS_PER_YEAR = 12
MOM_WEEKS_PER_YEAR = 52
MOM_HOURS_PER_WEEK = 44
DAILY_RATE_HOURS = 8

DEFAULT_MEAL_ALLOWANCE = 5.0
EXPIRY_WARNING_DAYS = 60

HEALTH_POLL_SECONDS = 10
HEALTH_TIMEOUT_SECONDS = 2.0
REMINDER_POLL_SECONDS = 30

OFFICE_KEYWORDS = ("ADMIN", "MANAGER", "OFFICE", "DIRECTOR", "ACCOUNTANT", "CLERK", "HR", "SECRETARY")
