"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DENIED_VISIBILITY_DAYS = 7
ENTRY_HISTORY_MONTHS = 3
DEFAULT_SESSION_DAYS = 7
DEFAULT_ENTRY_SOURCE = "web"
DATE_FORMAT = "%Y-%m-%d"
