"""
Codeforces API relay.

Builds the single upstream request for an endpoint/handle/count triple,
performs it, and reports the outcome as a tagged result so callers never
have to sniff a status string to tell transport success from failure.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, List, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from ..core import (
    CODEFORCES_API_BASE,
    UPSTREAM_TIMEOUT,
    UPSTREAM_USER_AGENT,
    get_logger,
)
from ..models import Envelope

logger = get_logger(__name__)

RATING_ENDPOINT = "user.rating"
FAILED_COMMENT = "Failed to fetch data from Codeforces API"
CACHE_CONTROL = "public, s-maxage=300, stale-while-revalidate=600"

# API method names look like "user.info" or "contest.standings".
_ENDPOINT_RE = re.compile(r"^[A-Za-z][A-Za-z0-9]*(\.[A-Za-z][A-Za-z0-9]*)+$")

T = TypeVar("T", bound=BaseModel)


class CodeforcesError(Exception):
    """Base error for anything that goes wrong fetching Codeforces data."""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.operation = operation


class UpstreamHTTPError(CodeforcesError):
    """Upstream answered with a non-2xx status or could not be reached."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        operation: Optional[str] = None,
    ):
        super().__init__(message, operation)
        self.status_code = status_code


class UpstreamStatusError(CodeforcesError):
    """Upstream answered 2xx but its own status field is not "OK"."""


class MalformedPayloadError(CodeforcesError):
    """Expected result list is missing or does not match the schema."""


@dataclass(frozen=True)
class Relayed:
    payload: Any


@dataclass(frozen=True)
class RelayFailed:
    message: str
    status_code: Optional[int] = None


RelayResult = Union[Relayed, RelayFailed]


def is_valid_endpoint(endpoint: str) -> bool:
    return bool(_ENDPOINT_RE.match(endpoint))


def build_upstream_url(
    endpoint: str, handle: str, count: Optional[int] = None
) -> httpx.URL:
    """Return the upstream URL for a relay request."""

    params: Dict[str, Any]
    if endpoint == RATING_ENDPOINT:
        params = {"handle": handle}
    elif count:
        params = {"handle": handle, "count": count}
    else:
        params = {"handles": handle}
    return httpx.URL(f"{CODEFORCES_API_BASE}/{endpoint}", params=params)


def upstream_headers() -> Dict[str, str]:
    return {"User-Agent": UPSTREAM_USER_AGENT, "Accept": "application/json"}


def create_client(transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=UPSTREAM_TIMEOUT, transport=transport)


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """FastAPI dependency that yields an upstream HTTP client."""

    async with create_client() as client:
        yield client


async def relay(
    client: httpx.AsyncClient,
    endpoint: str,
    handle: str,
    count: Optional[int] = None,
) -> RelayResult:
    """Forward one request upstream; never raises."""

    url = build_upstream_url(endpoint, handle, count)
    try:
        response = await client.get(url, headers=upstream_headers())
        if not response.is_success:
            raise UpstreamHTTPError(
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
                operation=endpoint,
            )
        payload = response.json()
    except Exception as exc:  # every failure becomes a RelayFailed
        message = str(exc) or type(exc).__name__
        logger.warning(
            "Codeforces relay failed",
            endpoint=endpoint,
            handle=handle,
            url=str(url),
            error=message,
            error_type=type(exc).__name__,
        )
        return RelayFailed(message, status_code=getattr(exc, "status_code", None))

    logger.info(
        "Codeforces relay completed",
        endpoint=endpoint,
        handle=handle,
        status_code=response.status_code,
        upstream_status=payload.get("status") if isinstance(payload, dict) else None,
    )
    return Relayed(payload)


def failure_envelope(message: str) -> Dict[str, str]:
    return {"status": "FAILED", "comment": FAILED_COMMENT, "error": message}


def unwrap_result(outcome: RelayResult, *, operation: str, fallback: str) -> List[Any]:
    """
    Return the `result` list of a relayed response.

    Raises:
        UpstreamHTTPError: the relay itself failed
        UpstreamStatusError: upstream status is not "OK"; carries its comment
        MalformedPayloadError: no envelope, or `result` is not a list
    """

    if isinstance(outcome, RelayFailed):
        raise UpstreamHTTPError(
            f"{FAILED_COMMENT}: {outcome.message}",
            status_code=outcome.status_code,
            operation=operation,
        )

    try:
        envelope = Envelope.model_validate(outcome.payload)
    except ValidationError as exc:
        raise MalformedPayloadError(f"Invalid {operation} data format", operation) from exc

    if envelope.status != "OK":
        raise UpstreamStatusError(envelope.comment or fallback, operation)

    if not isinstance(envelope.result, list):
        raise MalformedPayloadError(f"Invalid {operation} data format", operation)
    return envelope.result


def parse_items(model_cls: Type[T], items: List[Any], *, operation: str) -> List[T]:
    """Validate every element of an upstream result list against a schema."""

    try:
        return [model_cls.model_validate(item) for item in items]
    except ValidationError as exc:
        raise MalformedPayloadError(f"Invalid {operation} data format", operation) from exc


__all__ = [
    "CACHE_CONTROL",
    "FAILED_COMMENT",
    "RATING_ENDPOINT",
    "CodeforcesError",
    "MalformedPayloadError",
    "RelayFailed",
    "RelayResult",
    "Relayed",
    "UpstreamHTTPError",
    "UpstreamStatusError",
    "build_upstream_url",
    "create_client",
    "failure_envelope",
    "get_http_client",
    "is_valid_endpoint",
    "parse_items",
    "relay",
    "unwrap_result",
]
