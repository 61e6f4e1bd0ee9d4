"""Energy dashboard administration service."""
