"""HTTP status codes for tenancy exceptions."""

from fastapi import status

from tenancy.ports.exceptions import (
    CallerNotAuthorizedError,
    TenantDirectoryUnavailableError,
    TenantNotFoundError,
)

TENANCY_ERROR_STATUSES = {
    TenantNotFoundError: status.HTTP_404_NOT_FOUND,
    TenantDirectoryUnavailableError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    CallerNotAuthorizedError: status.HTTP_403_FORBIDDEN,
}
