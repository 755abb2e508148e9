"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SECTION = "A"
PERCENT_DECIMALS = 2
MAX_SUBJECT_LENGTH = 100
MAX_REMARKS_LENGTH = 500
