"""SPARQL request and response shapes and query classification."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, ClassVar


@dataclass
class SparqlQuery:
    """A SPARQL query as submitted by a client."""

    query: str
    format: str | None = None


@dataclass
class SparqlResponse:
    """The result of running a SPARQL query."""

    results: str
    query_type: str
    execution_time_ms: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ErrorResponse:
    """An error body returned with an internal server error status."""

    status_code: ClassVar[int] = 500

    error: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def determine_query_type(query: str) -> str:
    """Classify a query by the keywords it contains, case-insensitively."""
    upper = query.upper()
    if "SELECT" in upper:
        return "SELECT"
    if "ASK" in upper:
        return "ASK"
    if "CONSTRUCT" in upper:
        return "CONSTRUCT"
    if "INSERT" in upper or "DELETE" in upper:
        return "UPDATE"
    return "UNKNOWN"