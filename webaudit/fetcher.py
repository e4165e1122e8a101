"""
Page fetcher: the only network step of an audit.

Retrieves raw HTML plus lower-cased response headers and wall-clock timing.
Transport failures (timeout, DNS, refused connection, redirect loops) raise a
single :class:`~webaudit.core.exceptions.FetchError`; there is no retry and no
partial result.
"""

from __future__ import annotations

import time

import requests
from pydantic import BaseModel, ConfigDict, Field

from webaudit.core.exceptions import FetchError
from webaudit.core.logging_config import get_logger
from webaudit.core.models import normalize_url

logger = get_logger(__name__)


HEADERS: dict[str, str] = {
    "User-Agent": "Mozilla/5.0 (compatible; WebAuditBot/1.0)",
    "Accept": "text/html,application/xhtml+xml",
}

REQUEST_TIMEOUT = 15


class FetchedPage(BaseModel):
    """Everything the rule checks need from the network, captured once."""

    model_config = ConfigDict(frozen=True)

    requested_url: str
    final_url: str
    status_code: int = 200
    html: str = ""
    headers: dict[str, str] = Field(default_factory=dict)
    response_time_ms: int = Field(default=0, ge=0)

    @property
    def is_https(self) -> bool:
        return self.final_url.startswith("https://")


def fetch_page(
    url: str,
    timeout: int = REQUEST_TIMEOUT,
    session: requests.Session | None = None,
) -> FetchedPage:
    """GET ``url`` (redirects followed) and capture body, headers and timing.

    Args:
        url:     Target URL; ``https://`` is prepended when no scheme is given.
        timeout: Hard timeout in seconds for connect + read.
        session: Optional :class:`requests.Session` (connection reuse in batch
                 runs, injection in tests).

    Returns:
        A :class:`FetchedPage`.

    Raises:
        FetchError: On any transport-level failure.
    """
    target = normalize_url(url)
    http = session or requests
    started = time.perf_counter()
    try:
        resp = http.get(target, headers=HEADERS, timeout=timeout, allow_redirects=True)
    except requests.RequestException as exc:
        logger.warning("GET %s failed: %s", target, exc)
        raise FetchError(target, reason=str(exc)) from exc
    elapsed_ms = int((time.perf_counter() - started) * 1000)

    logger.debug("GET %s -> %d (%d ms)", target, resp.status_code, elapsed_ms)
    if resp.status_code >= 400:
        logger.warning("  %s answered HTTP %d; auditing the returned document.", target, resp.status_code)

    return FetchedPage(
        requested_url=target,
        final_url=resp.url or target,
        status_code=resp.status_code,
        html=resp.text,
        headers={k.lower(): v for k, v in resp.headers.items()},
        response_time_ms=elapsed_ms,
    )
