"""Reachability checks for single URLs.

Each URL gets a HEAD request.  Only a timeout triggers a second attempt, and
that attempt is a single GET; every other transport error is reported as a
:class:`Failure` straight away.
"""

from __future__ import annotations

import socket
import ssl
from typing import Optional

import httpx

from llms_links.config import Settings, settings
from llms_links.models import DocumentPath, Failure, Skipped, Success, ValidationOutcome

DEFAULT_TIMEOUT = 15.0
_HTTP_SCHEMES = ("http://", "https://")


def build_client(cfg: Optional[Settings] = None) -> httpx.AsyncClient:
    """Return an :class:`httpx.AsyncClient` configured for link checking.

    Redirects are followed up to ``cfg.max_redirects`` and the pool is capped at
    ``cfg.max_connections``.  httpx never retries on its own, so each request
    below is exactly one attempt.
    """
    cfg = cfg or settings
    limit = cfg.max_connections
    return httpx.AsyncClient(
        headers={"User-Agent": cfg.user_agent},
        timeout=cfg.request_timeout,
        follow_redirects=True,
        max_redirects=cfg.max_redirects,
        limits=httpx.Limits(max_connections=limit, max_keepalive_connections=limit),
    )


# ---------------------------------------------------------------------------
# Error descriptions
# ---------------------------------------------------------------------------

def _root_cause(exc: BaseException, kind: type) -> Optional[BaseException]:
    """Walk the ``__cause__``/``__context__`` chain of *exc* looking for *kind*."""
    seen: set[int] = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, kind):
            return current
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return None


def describe_error(exc: Exception) -> str:
    """Return a human-readable reason for an httpx request error."""
    if isinstance(exc, httpx.TimeoutException):
        return "Request timed out"
    if isinstance(exc, httpx.ConnectError):
        message = str(exc)
        if _root_cause(exc, socket.gaierror) is not None or "Name or service not known" in message:
            return f"DNS resolution error: {message}"
        if _root_cause(exc, ssl.SSLError) is not None or "SSL" in message or "CERTIFICATE" in message:
            return f"SSL/TLS error: {message}"
        return f"Connection error: {message}"
    if isinstance(exc, httpx.TooManyRedirects):
        return "Too many redirects"
    if isinstance(exc, (httpx.UnsupportedProtocol, httpx.InvalidURL, httpx.LocalProtocolError)):
        return f"Request setup error: {exc}"
    if isinstance(exc, httpx.RemoteProtocolError):
        return f"HTTP protocol error: {exc}"
    return f"Unknown error: {exc!r}"


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def classify_status(url: str, status_code: int, source: DocumentPath) -> ValidationOutcome:
    """Map a response status onto :class:`Success` or :class:`Failure`."""
    if 200 <= status_code < 400:
        print(f"[CHECK] ✅ {status_code} OK: {url}")
        return Success(url=url, status_code=status_code, source=source)
    print(f"[CHECK] ❌ {status_code} Error: {url}")
    return Failure(url=url, reason=f"Status {status_code}", source=source)


async def _get_status(client: httpx.AsyncClient, url: str, timeout: float) -> int:
    # Streamed so the body is never downloaded.
    async with client.stream("GET", url, timeout=timeout) as response:
        return response.status_code


async def validate(
    url: str,
    source: DocumentPath,
    client: httpx.AsyncClient,
    timeout: float = DEFAULT_TIMEOUT,
) -> ValidationOutcome:
    """Check that *url* is reachable and return the outcome.

    Non-HTTP(S) URLs are skipped without touching the network.  A HEAD that
    times out is followed by exactly one GET; any other error fails the URL.
    """
    if not url.startswith(_HTTP_SCHEMES):
        print(f"[CHECK] ⚠️ Skipping non-HTTP URL: {url}")
        return Skipped(url=url, reason="Non-HTTP(S) URL", source=source)

    print(f"[CHECK] 🔗 Checking {url} …")
    try:
        response = await client.head(url, timeout=timeout)
    except httpx.TimeoutException:
        print(f"[CHECK] ⚠️ HEAD timed out for {url}, trying GET …")
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        return Failure(url=url, reason=describe_error(exc), source=source)
    else:
        return classify_status(url, response.status_code, source)

    try:
        status_code = await _get_status(client, url, timeout)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        return Failure(url=url, reason=describe_error(exc), source=source)
    return classify_status(url, status_code, source)
