"""Scheduling vocabulary shared by the planner, the repository and the API layer"""

# Weekday names, indexed like date.weekday() (Monday == 0)
WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

# Recurrence frequencies
FREQUENCY_WEEKLY = "Weekly"
FREQUENCY_BIWEEKLY = "Bi-weekly"
FREQUENCY_MONTHLY = "Monthly"  # fixed 4-week period, not a calendar month

# Generate mode: length of one recurrence period, measured from the cursor
FREQUENCY_PERIOD_DAYS = {
    FREQUENCY_WEEKLY: 7,
    FREQUENCY_BIWEEKLY: 14,
    FREQUENCY_MONTHLY: 28,
}

# Sync mode: gap placed after the last date assigned in a weekday cycle
SYNC_CURSOR_GAP_DAYS = {
    FREQUENCY_WEEKLY: 1,
    FREQUENCY_BIWEEKLY: 8,
    FREQUENCY_MONTHLY: 22,
}

# Job statuses
STATUS_PENDING = "Pending"
STATUS_SCHEDULED = "Scheduled"
STATUS_IN_PROGRESS = "In Progress"
STATUS_COMPLETED = "Completed"
STATUS_CANCELLED = "Cancelled"

TERMINAL_STATUSES = frozenset({STATUS_COMPLETED, STATUS_CANCELLED})

# Client pricing models
PRICING_PER_CLEANING = "Per Cleaning"
PRICING_HOURLY = "Hourly Rate"

# Operation modes
MODE_SYNC = "sync"
MODE_GENERATE = "generate"

SCOPE_SINGLE = "single"
SCOPE_ALL_FUTURE = "all_future"
RESCHEDULE_SCOPES = (SCOPE_SINGLE, SCOPE_ALL_FUTURE)
