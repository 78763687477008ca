"""Tenancy domain layer."""

from tenancy.domain.aggregates import Avatar, Tenant

__all__ = ["Avatar", "Tenant"]
