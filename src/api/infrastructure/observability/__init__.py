"""Probes for shared infrastructure (Domain-Oriented Observability).

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from infrastructure.observability.probes import DatabaseProbe, DefaultDatabaseProbe

__all__ = [
    "DatabaseProbe",
    "DefaultDatabaseProbe",
]
