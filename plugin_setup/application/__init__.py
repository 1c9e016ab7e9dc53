"""Setup application layer."""
