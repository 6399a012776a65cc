# =============================================================================
# core/http.py  —  One-shot outbound HTTP for the geocoding and weather tools
# =============================================================================
#
# Every network tool makes exactly ONE request per call: no retries, no
# backoff, no caching.  A non-2xx status or a body that is not JSON becomes
# an UpstreamError, which the owning handler turns into "Error: ..." text.
#
# Handlers accept an optional httpx.AsyncClient so tests can pass one built
# on httpx.MockTransport; otherwise a short-lived client is opened per call.
# =============================================================================

from contextlib import asynccontextmanager
import logging
from typing import Any, AsyncIterator, Optional

import httpx

from core.errors import UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


@asynccontextmanager
async def http_client(
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield `client` untouched, or a fresh client that is closed afterwards."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=timeout) as owned:
        yield owned


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    params: dict[str, Any],
    headers: Optional[dict[str, str]] = None,
) -> Any:
    """GET `url` and return the decoded JSON body."""
    response = await client.get(url, params=params, headers=headers)
    if not response.is_success:
        logger.warning("GET %s failed with status %s", url, response.status_code)
        raise UpstreamError(f"API request failed: {response.status_code}")
    try:
        return response.json()
    except ValueError as e:
        raise UpstreamError(f"invalid JSON response: {e}") from e
