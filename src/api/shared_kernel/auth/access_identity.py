"""Caller identity extraction from upstream access-gateway headers.

The upstream gateway (Cloudflare Access) authenticates callers and injects
either a service-token client id header or an assertion header. This module
turns those headers into an :class:`Identity`.

Trust boundary: no cryptographic signature verification is performed. Only
the gateway can inject these headers, so the assertion payload is parsed
structurally and checked for expiry and issuer, nothing more. Adding signature
verification here would be a behaviour change, not a bug fix.
"""

from __future__ import annotations

import json
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from jose.utils import base64url_decode

if TYPE_CHECKING:
    from shared_kernel.auth.observability import AccessIdentityProbe

CLIENT_ID_HEADER = "Cf-Access-Client-Id"
ASSERTION_HEADER = "Cf-Access-Jwt-Assertion"
DEV_CLIENT_ID_HEADER = "X-Dev-Client-Id"

DEV_ISSUER = "dev"
DEV_PLACEHOLDER_CLIENT_ID = "dev-client-id"


class IdentityKind(StrEnum):
    """How the caller authenticated at the gateway."""

    SERVICE_TOKEN = "service_token"
    IDP_USER = "idp_user"


@dataclass(frozen=True)
class Identity:
    """Validated caller identity for the current request.

    A tagged variant: ``kind`` discriminates service tokens from IdP users.
    ``caller_id`` is what tenant allowlists are matched against; for IdP
    users it is the email address.
    """

    kind: IdentityKind
    caller_id: str
    email: str | None = None

    @classmethod
    def service_token(cls, caller_id: str) -> Identity:
        """Create a service-token identity."""
        return cls(kind=IdentityKind.SERVICE_TOKEN, caller_id=caller_id)

    @classmethod
    def idp_user(cls, email: str) -> Identity:
        """Create an IdP user identity keyed by email."""
        return cls(kind=IdentityKind.IDP_USER, caller_id=email, email=email)


@dataclass(frozen=True)
class AccessClaims:
    """Structurally parsed assertion payload. Never signature-checked."""

    sub: str | None = None
    common_name: str | None = None
    email: str | None = None
    iss: str | None = None
    exp: float | None = None
    aud: list[str] | None = None

    @property
    def is_service_token(self) -> bool:
        """Service tokens carry an empty-string subject."""
        return self.sub == ""

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> AccessClaims:
        """Build claims from a decoded payload.

        Raises:
            InvalidAssertionFormatError: If a known claim has the wrong type.
        """
        exp = payload.get("exp")
        if exp is not None and (
            isinstance(exp, bool) or not isinstance(exp, (int, float))
        ):
            raise InvalidAssertionFormatError("Invalid JWT format: exp is not numeric")

        aud = payload.get("aud")
        if isinstance(aud, str):
            aud = [aud]

        return cls(
            sub=_optional_str(payload, "sub"),
            common_name=_optional_str(payload, "common_name"),
            email=_optional_str(payload, "email"),
            iss=_optional_str(payload, "iss"),
            exp=exp,
            aud=aud,
        )


class AuthenticationError(Exception):
    """Raised when caller identity cannot be established from the request."""

    reason: str = "authentication_failed"


class MissingCredentialsError(AuthenticationError):
    """No gateway evidence was present on the request."""

    reason = "missing_credentials"


class InvalidAssertionFormatError(AuthenticationError):
    """The assertion header is not a decodable three-segment token."""

    reason = "invalid_assertion_format"


class TokenExpiredError(AuthenticationError):
    """The assertion's ``exp`` claim is in the past."""

    reason = "token_expired"


class InvalidIssuerError(AuthenticationError):
    """The assertion was issued by an unexpected gateway."""

    reason = "invalid_issuer"


class MissingCommonNameError(AuthenticationError):
    """A service-token assertion lacks ``common_name``."""

    reason = "missing_common_name"


class MissingEmailError(AuthenticationError):
    """An IdP assertion lacks ``email``."""

    reason = "missing_email"


def _optional_str(payload: dict[str, Any], key: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidAssertionFormatError(f"Invalid JWT format: {key} is not a string")
    return value


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON; an "exp": NaN would never expire.
    raise ValueError(f"Non-standard JSON constant: {name}")


def decode_assertion_payload(assertion: str) -> dict[str, Any]:
    """Decode the middle segment of a JWT-shaped assertion.

    Only the payload segment is decoded; header and signature are ignored.

    Args:
        assertion: Raw assertion header value.

    Returns:
        The payload as a dictionary.

    Raises:
        InvalidAssertionFormatError: If the dot structure, base64 or JSON
            is malformed, or the payload is not a JSON object.
    """
    segments = assertion.split(".")
    if len(segments) != 3:
        raise InvalidAssertionFormatError("Invalid JWT format")

    try:
        payload = json.loads(
            base64url_decode(segments[1].encode("ascii")),
            parse_constant=_reject_constant,
        )
    except (UnicodeError, ValueError) as e:
        raise InvalidAssertionFormatError("Invalid JWT format") from e

    if not isinstance(payload, dict):
        raise InvalidAssertionFormatError("Invalid JWT format")
    return payload


class AccessIdentityExtractor:
    """Extracts the caller identity from gateway headers.

    Evidence is considered in strict precedence order: development bypass,
    direct client-id header, assertion header. The first one present wins.
    """

    def __init__(
        self,
        probe: AccessIdentityProbe,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the extractor.

        Args:
            probe: Observability probe for logging events.
            clock: Returns the current time in epoch seconds.
        """
        self._probe = probe
        self._clock = clock

    def extract(self, headers: Mapping[str, str], expected_issuer: str) -> Identity:
        """Extract and validate the caller identity.

        Args:
            headers: Request headers. Starlette ``Headers`` are matched
                case-insensitively; plain mappings must use canonical names.
            expected_issuer: Gateway issuer to accept. ``"dev"`` enables the
                development bypass.

        Returns:
            The caller's Identity.

        Raises:
            AuthenticationError: A subclass naming the exact failure.
        """
        try:
            identity = self._extract(headers, expected_issuer)
        except AuthenticationError as e:
            self._probe.identity_rejected(reason=e.reason, detail=str(e))
            raise

        self._probe.identity_extracted(kind=identity.kind, caller_id=identity.caller_id)
        return identity

    def _extract(self, headers: Mapping[str, str], expected_issuer: str) -> Identity:
        if expected_issuer == DEV_ISSUER:
            caller_id = headers.get(DEV_CLIENT_ID_HEADER) or DEV_PLACEHOLDER_CLIENT_ID
            self._probe.development_bypass_used(caller_id=caller_id)
            return Identity.service_token(caller_id)

        # Presence alone is the trust signal: the gateway strips and injects it.
        client_id = headers.get(CLIENT_ID_HEADER)
        if client_id:
            return Identity.service_token(client_id)

        assertion = headers.get(ASSERTION_HEADER)
        if assertion:
            return self._identity_from_assertion(assertion, expected_issuer)

        raise MissingCredentialsError("Missing Access authentication headers")

    def _identity_from_assertion(self, assertion: str, expected_issuer: str) -> Identity:
        claims = AccessClaims.from_payload(decode_assertion_payload(assertion))

        if claims.exp is not None and claims.exp < self._clock():
            raise TokenExpiredError("Token expired")

        if claims.iss is not None and claims.iss != expected_issuer:
            raise InvalidIssuerError(
                f"Invalid issuer: expected {expected_issuer}, got {claims.iss}"
            )

        if claims.is_service_token:
            if not claims.common_name:
                raise MissingCommonNameError("Service token missing common_name")
            return Identity.service_token(claims.common_name)

        if not claims.email:
            raise MissingEmailError("IdP token missing email")
        return Identity.idp_user(claims.email)
