"""Shared Kernel: the small vocabulary both bounded contexts agree on.

- ``auth``: caller identity read from gateway trust headers.
- ``middleware``: tenant context value objects handed from tenancy to media.
- ``caching``: the read-through TTL cache used for directory lookups.
- ``observability_context``: request metadata bound onto probes.
- ``exceptions``: errors that belong to no single context.

Nothing here may import ``tenancy``, ``media`` or ``infrastructure``.
"""
