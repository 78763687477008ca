"""Tenancy presentation layer.

Tenancy exposes no routes of its own; its dependencies guard the media
routes. Only the error mapping lives here.
"""

from tenancy.presentation.errors import TENANCY_ERROR_STATUSES

__all__ = ["TENANCY_ERROR_STATUSES"]
