"""
UTC time helpers.

All timestamps handed to the CDN are Unix seconds computed from a
timezone-aware UTC clock. Use these helpers instead of time.time() or
datetime.utcnow() so tests can patch a single function.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def unix_now() -> int:
    """
    Return the current Unix timestamp in whole seconds.

    Returns:
        Seconds since epoch (UTC)
    """
    return int(utc_now().timestamp())
