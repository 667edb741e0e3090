"""Tests for single-URL reachability checks.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made.  Routes are registered per HTTP method so the tests can assert
  exactly which requests the validator issued.
- ``describe_error`` is tested directly against constructed httpx exceptions.
"""

from __future__ import annotations

import socket
import ssl
from pathlib import Path

import httpx
import pytest
import respx

from llms_links.config import Settings
from llms_links.models import Failure, Skipped, Success
from llms_links.validator import build_client, classify_status, describe_error, validate

_SOURCE = Path("docs/llms.txt")
_URL = "https://example.com/page"


@pytest.fixture
async def client():
    async with httpx.AsyncClient(follow_redirects=True, max_redirects=3) as c:
        yield c


# ---------------------------------------------------------------------------
# Non-network paths
# ---------------------------------------------------------------------------

class TestSkipped:
    @pytest.mark.parametrize("url", ["mailto:a@b.com", "ftp://files.example", "./local.md", "#anchor", "HTTPS://upper.example"])
    async def test_non_http_urls_are_skipped(self, client, url: str) -> None:
        with respx.mock:
            outcome = await validate(url, _SOURCE, client)
            assert respx.calls.call_count == 0

        assert outcome == Skipped(url=url, reason="Non-HTTP(S) URL", source=_SOURCE)


class TestClassifyStatus:
    @pytest.mark.parametrize("status", [200, 204, 301, 399])
    def test_success_range(self, status: int) -> None:
        assert classify_status(_URL, status, _SOURCE) == Success(url=_URL, status_code=status, source=_SOURCE)

    @pytest.mark.parametrize("status", [100, 199, 400, 404, 500, 600])
    def test_failure_range(self, status: int) -> None:
        assert classify_status(_URL, status, _SOURCE) == Failure(
            url=_URL, reason=f"Status {status}", source=_SOURCE
        )


# ---------------------------------------------------------------------------
# HEAD requests
# ---------------------------------------------------------------------------

class TestHead:
    @pytest.mark.parametrize("status", [200, 301, 399])
    async def test_success_statuses(self, client, status: int) -> None:
        with respx.mock:
            head = respx.head(_URL).mock(return_value=httpx.Response(status))
            outcome = await validate(_URL, _SOURCE, client)

        assert outcome == Success(url=_URL, status_code=status, source=_SOURCE)
        assert head.call_count == 1

    @pytest.mark.parametrize("status", [404, 500, 600])
    async def test_failure_statuses(self, client, status: int) -> None:
        with respx.mock:
            respx.head(_URL).mock(return_value=httpx.Response(status))
            outcome = await validate(_URL, _SOURCE, client)

        assert outcome == Failure(url=_URL, reason=f"Status {status}", source=_SOURCE)

    async def test_redirect_is_followed(self, client) -> None:
        with respx.mock:
            respx.head(_URL).mock(
                return_value=httpx.Response(301, headers={"Location": "https://example.com/new"})
            )
            respx.head("https://example.com/new").mock(return_value=httpx.Response(200))
            outcome = await validate(_URL, _SOURCE, client)

        assert outcome == Success(url=_URL, status_code=200, source=_SOURCE)

    async def test_redirect_loop_fails_without_get(self, client) -> None:
        with respx.mock(assert_all_called=False) as respx_mock:
            respx_mock.head(_URL).mock(return_value=httpx.Response(302, headers={"Location": _URL}))
            get = respx_mock.get(_URL).mock(return_value=httpx.Response(200))
            outcome = await validate(_URL, _SOURCE, client)

        assert outcome == Failure(url=_URL, reason="Too many redirects", source=_SOURCE)
        assert get.call_count == 0

    async def test_connect_error_fails_without_get(self, client) -> None:
        with respx.mock(assert_all_called=False) as respx_mock:
            respx_mock.head(_URL).mock(side_effect=httpx.ConnectError("Connection refused"))
            get = respx_mock.get(_URL).mock(return_value=httpx.Response(200))
            outcome = await validate(_URL, _SOURCE, client)

        assert isinstance(outcome, Failure)
        assert outcome.reason == "Connection error: Connection refused"
        assert get.call_count == 0


# ---------------------------------------------------------------------------
# Timeout fallback
# ---------------------------------------------------------------------------

class TestTimeoutFallback:
    async def test_head_timeout_falls_back_to_get(self, client) -> None:
        with respx.mock:
            head = respx.head(_URL).mock(side_effect=httpx.ReadTimeout)
            get = respx.get(_URL).mock(return_value=httpx.Response(200, text="ok"))
            outcome = await validate(_URL, _SOURCE, client)

        assert outcome == Success(url=_URL, status_code=200, source=_SOURCE)
        assert head.call_count == 1
        assert get.call_count == 1

    async def test_get_status_is_classified(self, client) -> None:
        with respx.mock:
            respx.head(_URL).mock(side_effect=httpx.ConnectTimeout)
            respx.get(_URL).mock(return_value=httpx.Response(503))
            outcome = await validate(_URL, _SOURCE, client)

        assert outcome == Failure(url=_URL, reason="Status 503", source=_SOURCE)

    async def test_get_timeout_is_failure(self, client) -> None:
        with respx.mock:
            head = respx.head(_URL).mock(side_effect=httpx.ReadTimeout)
            get = respx.get(_URL).mock(side_effect=httpx.ReadTimeout)
            outcome = await validate(_URL, _SOURCE, client)

        assert outcome == Failure(url=_URL, reason="Request timed out", source=_SOURCE)
        assert head.call_count == 1
        assert get.call_count == 1

    async def test_get_error_is_failure(self, client) -> None:
        with respx.mock:
            respx.head(_URL).mock(side_effect=httpx.PoolTimeout)
            get = respx.get(_URL).mock(side_effect=httpx.RemoteProtocolError("Server disconnected"))
            outcome = await validate(_URL, _SOURCE, client)

        assert outcome == Failure(
            url=_URL, reason="HTTP protocol error: Server disconnected", source=_SOURCE
        )
        assert get.call_count == 1


# ---------------------------------------------------------------------------
# describe_error
# ---------------------------------------------------------------------------

def _chained(outer: Exception, cause: BaseException) -> Exception:
    outer.__cause__ = cause
    return outer


class TestDescribeError:
    def test_timeout(self) -> None:
        assert describe_error(httpx.ReadTimeout("timed out")) == "Request timed out"

    def test_dns_by_cause(self) -> None:
        exc = _chained(httpx.ConnectError("lookup failed"), socket.gaierror(-2, "Name or service not known"))
        assert describe_error(exc) == "DNS resolution error: lookup failed"

    def test_dns_by_message(self) -> None:
        exc = httpx.ConnectError("[Errno -2] Name or service not known")
        assert describe_error(exc).startswith("DNS resolution error:")

    def test_tls(self) -> None:
        exc = _chained(httpx.ConnectError("handshake failed"), ssl.SSLCertVerificationError("bad cert"))
        assert describe_error(exc) == "SSL/TLS error: handshake failed"

    def test_connection(self) -> None:
        assert describe_error(httpx.ConnectError("refused")) == "Connection error: refused"

    def test_too_many_redirects(self) -> None:
        assert describe_error(httpx.TooManyRedirects("loop")) == "Too many redirects"

    def test_request_setup(self) -> None:
        assert describe_error(httpx.UnsupportedProtocol("no scheme")) == "Request setup error: no scheme"
        assert describe_error(httpx.InvalidURL("bad url")) == "Request setup error: bad url"

    def test_unknown(self) -> None:
        assert describe_error(httpx.ReadError("reset")).startswith("Unknown error:")


class TestBuildClient:
    async def test_uses_settings(self) -> None:
        cfg = Settings(request_timeout=3.0, max_redirects=4, user_agent="probe/1.0")
        async with build_client(cfg) as c:
            assert c.follow_redirects is True
            assert c.max_redirects == 4
            assert c.timeout.read == 3.0
            assert c.headers["User-Agent"] == "probe/1.0"
