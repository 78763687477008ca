"""Authentication shared kernel module."""

from shared_kernel.auth.access_identity import (
    AccessClaims,
    AccessIdentityExtractor,
    AuthenticationError,
    Identity,
    IdentityKind,
    InvalidAssertionFormatError,
    InvalidIssuerError,
    MissingCommonNameError,
    MissingCredentialsError,
    MissingEmailError,
    TokenExpiredError,
)
from shared_kernel.auth.observability import (
    AccessIdentityProbe,
    DefaultAccessIdentityProbe,
)

__all__ = [
    "AccessClaims",
    "AccessIdentityExtractor",
    "AccessIdentityProbe",
    "AuthenticationError",
    "DefaultAccessIdentityProbe",
    "Identity",
    "IdentityKind",
    "InvalidAssertionFormatError",
    "InvalidIssuerError",
    "MissingCommonNameError",
    "MissingCredentialsError",
    "MissingEmailError",
    "TokenExpiredError",
]
