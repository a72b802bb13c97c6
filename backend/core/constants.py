"""Application constants and error messages."""

# Pagination
DEFAULT_PAGE_SIZE = 10
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100
SEARCH_MAX_LENGTH = 100
# Largest offset a signed 64-bit OFFSET clause accepts
MAX_OFFSET = 2**63 - 1

# Person field bounds
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
PLACE_MAX_LENGTH = 100
MIN_AGE = 0
MAX_AGE = 150

# Messages
DATABASE_UNAVAILABLE = "Database unavailable"
UNEXPECTED_ERROR = "An unexpected error occurred"
