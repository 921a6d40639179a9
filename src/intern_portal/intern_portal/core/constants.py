"""Constants and defaults.

Note: Keep store keys and wire constants here so controllers and services agree.
"""

APPLICATION_KEY_PREFIX = "application:"
ANNOUNCEMENT_KEY = "announcement:text"

DEFAULT_APPLICATION_ID_PREFIX = "INT"
APPLICATION_ID_RANDOM_LENGTH = 7

QR_PAYLOAD_TYPE = "internship-application"

DEFAULT_MAX_RESUME_BYTES = 10 * 1024 * 1024
DEFAULT_SIGNED_URL_MAX_AGE = 365 * 24 * 3600

# Attempts for a compare-and-swap attendance write before giving up
RECORD_WRITE_ATTEMPTS = 3
