"""Endpoint modules (one APIRouter each)."""
