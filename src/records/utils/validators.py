"""Input validation helpers used by the web layer.

Functions:
- parse_record_id(raw) -> int: Parse a path id, raising InvalidRecordIdError
- validate_email(email) -> bool: Check email shape
"""

import re

# Email validation pattern
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")

# Record ids in URL paths: ASCII digits only
RECORD_ID_PATTERN = re.compile(r"^[0-9]+\Z")


class InvalidRecordIdError(ValueError):
    """Raised when a record id in a path is not an integer."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Invalid ID format: '{raw}'")


def parse_record_id(raw: str) -> int:
    """Parse a record id taken from a URL path.

    Args:
        raw: Path segment (e.g. "12")

    Returns:
        The integer id

    Raises:
        InvalidRecordIdError: If raw is not a string of ASCII digits
    """
    if not RECORD_ID_PATTERN.match(raw):
        raise InvalidRecordIdError(raw)
    return int(raw)


def validate_email(email: str) -> bool:
    """Validate email format.

    Args:
        email: Email address to validate

    Returns:
        True if the address looks valid, False otherwise
    """
    return bool(EMAIL_PATTERN.match(email))
