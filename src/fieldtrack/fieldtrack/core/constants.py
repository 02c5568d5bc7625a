"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

PHONE_DIGITS = 10
MIN_NAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6

UNKNOWN_WORKER = "Unknown"
STATUS_ALL = "all"

DEFAULT_FOLLOW_UP_HOURS = 24
DEFAULT_BUCKET_NAME = "visit-photos"
PHOTO_PATH_PREFIX = "visits"
DEFAULT_REQUEST_TIMEOUT = 15

PERSONNEL_PREVIEW_LIMIT = 4
PROFILE_RECENT_VISITS = 5

SESSION_DAYS = 7
DASHBOARD_STATE_KEY = "dashboard_state"
