"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y redirecciones para sondeos y descargas.
- Facilita testeo: se puede sustituir por un cliente con `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(settings: AppSettings | None = None) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    El timeout por defecto es el de la descarga completa; los sondeos pasan
    el suyo (más corto) en cada petición.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/pdf,application/octet-stream;q=0.9,*/*;q=0.8",
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
    )


async def fetch_bytes(client: httpx.AsyncClient, url: str, *, timeout: float) -> bytes:
    """Descarga completa de `url`. Propaga `httpx.HTTPError` (incluye no-2xx)."""

    response = await client.get(url, timeout=httpx.Timeout(timeout))
    response.raise_for_status()
    return response.content


async def fetch_head_bytes(
    client: httpx.AsyncClient,
    url: str,
    *,
    size: int,
    timeout: float,
) -> bytes:
    """Lee solo los primeros `size` bytes del cuerpo (streaming).

    Propaga `httpx.HTTPError` igual que `fetch_bytes`.
    """

    head = b""
    async with client.stream("GET", url, timeout=httpx.Timeout(timeout)) as response:
        response.raise_for_status()
        async for chunk in response.aiter_bytes():
            head += chunk
            if len(head) >= size:
                break
    return head[:size]
