"""Async SQLAlchemy engine used by the keep-alive ping."""
