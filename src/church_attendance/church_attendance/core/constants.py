"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_MIN_PASSWORD_LENGTH = 6
DEFAULT_DASHBOARD_SUNDAYS = 4
DEFAULT_PLACEHOLDER_DOMAIN = "example.com"
DEFAULT_SIGNIN_MAX_ATTEMPTS = 5
DEFAULT_SIGNIN_COOLDOWN_SECONDS = 60
DEFAULT_SIGNIN_WINDOW_SECONDS = 300

DEFAULT_POSITION = "성도"
DEFAULT_SERVICE_TYPE = "주일3부"

POSITIONS = (
    "목사",
    "부목사",
    "강도사",
    "전도사",
    "집사",
    "안수집사",
    "권사",
    "장로",
    "성도",
)

# Display order of the service-type select on the attendance page.
SERVICE_TYPES = (
    "주일3부",
    "주일1부",
    "주일2부",
    "수요예배",
    "금요기도회",
)
