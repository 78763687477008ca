"""Exceptions shared across bounded contexts."""


class ConfigurationError(Exception):
    """Raised when a required setting or binding is missing or unusable.

    Fatal for the request and not retryable by the caller; an operator has
    to fix the deployment (environment variables, directory records).
    """

    pass
