"""URL prober: retry only on transport failures, never on a bad signature."""

from __future__ import annotations

import httpx
import pytest

from adapters.url_prober import UrlProber
from conftest import PDF_BYTES, html_response, pdf_response
from core.interfaces.prober import DocumentProber

URL = "https://assets.example.test/fp911401510832-pss-global"


@pytest.mark.asyncio
async def test_valid_pdf_verifies_on_first_attempt(settings, make_client, capture_sleep) -> None:
    delays, sleep = capture_sleep
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(str(request.url))
        return pdf_response(request)

    async with make_client(handler) as client:
        result = await UrlProber(client, settings, sleep=sleep).probe(URL)

    assert result.verified is True
    assert result.attempts == 1
    assert result.last_error is None
    assert result.url == URL
    assert calls == [URL]
    assert delays == []


@pytest.mark.asyncio
async def test_invalid_signature_is_not_retried(settings, make_client, capture_sleep) -> None:
    delays, sleep = capture_sleep
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(str(request.url))
        return html_response(request)

    async with make_client(handler) as client:
        result = await UrlProber(client, settings, sleep=sleep).probe(URL)

    assert result.verified is False
    assert result.attempts == 1
    assert result.last_error is None
    assert result.negative_signature
    assert len(calls) == 1
    assert delays == []


@pytest.mark.asyncio
async def test_timeout_on_every_attempt_exhausts_budget(settings, make_client, capture_sleep) -> None:
    delays, sleep = capture_sleep
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(str(request.url))
        raise httpx.ReadTimeout("timed out", request=request)

    async with make_client(handler) as client:
        result = await UrlProber(client, settings, sleep=sleep).probe(URL)

    assert result.verified is False
    assert result.attempts == settings.probe_max_attempts == 3
    assert result.last_error is not None
    assert result.last_error.startswith("ReadTimeout")
    assert len(calls) == 3
    # Linear backoff: base delay times the attempt number, nothing after the last try.
    assert delays == [1.0, 2.0]


@pytest.mark.asyncio
async def test_transient_error_then_success(settings, make_client, capture_sleep) -> None:
    delays, sleep = capture_sleep
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(str(request.url))
        if len(calls) == 1:
            raise httpx.ConnectError("connection refused", request=request)
        return pdf_response(request)

    async with make_client(handler) as client:
        result = await UrlProber(client, settings, sleep=sleep).probe(URL)

    assert result.verified is True
    assert result.attempts == 2
    assert result.last_error is None
    assert delays == [1.0]


@pytest.mark.asyncio
async def test_http_404_is_retried_by_default(settings, make_client, capture_sleep) -> None:
    delays, sleep = capture_sleep

    def handler(request: httpx.Request) -> httpx.Response:
        return html_response(request, status=404)

    async with make_client(handler) as client:
        result = await UrlProber(client, settings, sleep=sleep).probe(URL)

    assert result.verified is False
    assert result.attempts == 3
    assert result.last_error == "HTTP 404"
    assert delays == [1.0, 2.0]


@pytest.mark.asyncio
async def test_http_404_is_definitive_when_client_errors_are_not_retried(
    settings, make_client, capture_sleep
) -> None:
    delays, sleep = capture_sleep
    strict = settings.model_copy(update={"retry_client_errors": False})

    def handler(request: httpx.Request) -> httpx.Response:
        return html_response(request, status=404)

    async with make_client(handler) as client:
        result = await UrlProber(client, strict, sleep=sleep).probe(URL)

    assert result.verified is False
    assert result.attempts == 1
    assert result.last_error == "HTTP 404"
    assert delays == []


@pytest.mark.asyncio
async def test_http_503_is_retried_even_when_client_errors_are_not(
    settings, make_client, capture_sleep
) -> None:
    _, sleep = capture_sleep
    strict = settings.model_copy(update={"retry_client_errors": False})
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        if len(calls) < 3:
            return httpx.Response(503, request=request)
        return pdf_response(request)

    async with make_client(handler) as client:
        result = await UrlProber(client, strict, sleep=sleep).probe(URL)

    assert result.verified is True
    assert result.attempts == 3


@pytest.mark.asyncio
async def test_explicit_attempt_budget_overrides_settings(settings, make_client, capture_sleep) -> None:
    delays, sleep = capture_sleep

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("connect timeout", request=request)

    async with make_client(handler) as client:
        result = await UrlProber(client, settings, sleep=sleep).probe(URL, max_attempts=1)

    assert result.attempts == 1
    assert result.verified is False
    assert delays == []


@pytest.mark.asyncio
async def test_short_body_is_a_negative_result(settings, make_client, capture_sleep) -> None:
    _, sleep = capture_sleep

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"%P", request=request)

    async with make_client(handler) as client:
        result = await UrlProber(client, settings, sleep=sleep).probe(URL)

    assert result.verified is False
    assert result.attempts == 1


@pytest.mark.asyncio
async def test_follows_redirects_to_the_document(settings, make_client, capture_sleep) -> None:
    _, sleep = capture_sleep

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("-pss-global"):
            return httpx.Response(302, headers={"location": "https://cdn.example.test/file.pdf"}, request=request)
        return httpx.Response(200, content=PDF_BYTES, request=request)

    async with make_client(handler) as client:
        result = await UrlProber(client, settings, sleep=sleep).probe(URL)

    assert result.verified is True
    assert result.url == URL


def test_satisfies_prober_protocol(settings) -> None:
    client = httpx.AsyncClient(transport=httpx.MockTransport(pdf_response))
    assert isinstance(UrlProber(client, settings), DocumentProber)


@pytest.mark.asyncio
async def test_malformed_url_is_a_definitive_failure(settings, make_client, capture_sleep) -> None:
    delays, sleep = capture_sleep
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(str(request.url))
        return pdf_response(request)

    async with make_client(handler) as client:
        result = await UrlProber(client, settings, sleep=sleep).probe("http://[::1/911401510832")

    assert result.verified is False
    assert result.attempts == 1
    assert result.last_error is not None
    assert result.last_error.startswith("InvalidURL")
    assert calls == []
    assert delays == []
