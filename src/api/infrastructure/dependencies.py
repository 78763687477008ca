"""Shared infrastructure dependencies.

Provides ONLY request-scoped plumbing shared by every bounded context.
Does NOT import from bounded contexts to maintain DDD boundaries.
"""

from uuid import uuid4

from fastapi import Request

from shared_kernel.observability_context import ObservationContext

REQUEST_ID_HEADERS = ("X-Request-Id", "Cf-Ray")


def get_observation_context(request: Request) -> ObservationContext:
    """Build the observation context for the current request.

    The request id is taken from the first upstream correlation header
    present, or generated.

    Returns:
        ObservationContext carrying the request id.
    """
    for header in REQUEST_ID_HEADERS:
        value = request.headers.get(header)
        if value:
            return ObservationContext(request_id=value)
    return ObservationContext(request_id=uuid4().hex)
