"""Setup domain layer."""
