"""Shared cross-cutting helpers: logging setup and time utilities."""
