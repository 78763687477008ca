"""Database infrastructure - async engines, sessions and table models."""
