"""Application-wide constants.

Hierarchy levels and field lengths live here so the role definitions,
the database adapter and the schemas agree on the same numbers.
"""

# Role hierarchy levels (higher = more authority)
MEMBER_LEVEL = 10
TRAINER_LEVEL = 50
ADMIN_LEVEL = 100

# String field lengths
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 100
MAX_ROLE_NAME_LENGTH = 50
MAX_REASON_LENGTH = 500

# Owner field used by filter_by_access when records don't name one
DEFAULT_OWNER_FIELD = "user_id"

# Generic denial text shown to users
ACCESS_DENIED_MESSAGE = "Access denied"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
