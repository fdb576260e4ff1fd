"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_NOTIFICATION_LIMIT = 100
MIN_PASSWORD_LENGTH = 6

# Bookable hours shown on the availability calendar.
DEFAULT_OPENING_HOUR = 9
DEFAULT_CLOSING_HOUR = 21
SLOT_MINUTES = 60

SLOT_UNAVAILABLE_MESSAGE = "Selected time slot is not available"
