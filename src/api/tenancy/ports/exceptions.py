"""Exceptions for the tenancy bounded context.

Raised by the resolver, the authorization gate and directory adapters; the
presentation layer maps them to HTTP responses.
"""


class TenantNotFoundError(Exception):
    """Raised when a hostname or username has no directory entry."""

    pass


class TenantDirectoryUnavailableError(Exception):
    """Raised when the tenant directory cannot be read.

    Surfaced once without retrying; the request fails with a server error.
    """

    pass


class CallerNotAuthorizedError(Exception):
    """Raised when a valid identity is not on the tenant's allowlist.

    Carries both ids so the denial can be audit-logged.
    """

    def __init__(self, caller_id: str, tenant: str):
        super().__init__(f"Client {caller_id} not authorized for user {tenant}")
        self.caller_id = caller_id
        self.tenant = tenant
