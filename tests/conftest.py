"""Shared fixtures: mock HTTP transports and a sleep recorder."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from core.config import AppSettings
from core.domain.models import TemplateGroup

PDF_BYTES = b"%PDF-1.7\n1 0 obj\n<< /Type /Catalog >>\nendobj\n%%EOF\n"
HTML_BYTES = b"<!DOCTYPE html><html><body><h1>404 Not Found</h1></body></html>"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        http_timeout_seconds=10.0,
        probe_timeout_seconds=5.0,
        probe_max_attempts=3,
        probe_backoff_seconds=1.0,
        retry_client_errors=True,
        templates_path=None,
    )


@pytest.fixture
def capture_sleep() -> tuple[list[float], Callable]:
    """Return `(delays, sleep)`; `sleep` records the delay instead of waiting."""

    delays: list[float] = []

    async def sleep(delay: float) -> None:
        delays.append(delay)

    return delays, sleep


@pytest.fixture
def make_client() -> Callable[[Handler], httpx.AsyncClient]:
    def factory(handler: Handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)

    return factory


@pytest.fixture
def example_groups() -> list[TemplateGroup]:
    return [
        TemplateGroup(
            name="primary",
            templates=(
                "https://a.example.test/doc/{12NC}.pdf",
                "https://b.example.test/fp{12NC}-pss-global",
            ),
        ),
        TemplateGroup(
            name="secondary",
            templates=(
                "https://c.example.test/{12NC}/leaflet_{12NC}.pdf",
                "https://d.example.test/assets/{12NC}",
            ),
        ),
    ]


def pdf_response(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, content=PDF_BYTES, headers={"content-type": "application/pdf"}, request=request)


def html_response(request: httpx.Request, status: int = 200) -> httpx.Response:
    return httpx.Response(status, content=HTML_BYTES, headers={"content-type": "text/html"}, request=request)
