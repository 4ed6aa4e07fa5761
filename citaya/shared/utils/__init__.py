"""Shared utilities."""

from citaya.shared.utils.datetime import unix_now, utc_now

__all__ = ["unix_now", "utc_now"]
