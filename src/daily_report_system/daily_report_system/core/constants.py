"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
TITLE_MAX_LENGTH = 100
CONTENT_MAX_LENGTH = 600
DATE_FORMAT = "%Y-%m-%d"
