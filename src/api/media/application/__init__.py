"""Application layer for the media bounded context."""
