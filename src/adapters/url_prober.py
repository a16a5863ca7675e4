"""Prober HTTP: verifica que una URL candidata sirve el documento esperado.

Política de intentos:
- Transporte OK + firma válida  -> verified=True, sin más intentos.
- Transporte OK + firma inválida -> verified=False inmediato (p.ej. página 404 en HTML).
- Fallo de transporte (timeout, red, no-2xx) -> se reintenta hasta `max_attempts`,
  esperando `backoff * número_de_intento` entre intentos.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

import httpx

from adapters.http_client import fetch_head_bytes
from core.config import AppSettings
from core.domain.errors import ProbeTransportError
from core.domain.models import ProbeResult
from core.interfaces.prober import DocumentProber
from core.log import get_logger, log_with_context
from core.signature import PDF_MAGIC, is_valid_document

logger = get_logger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


def _describe(exc: httpx.HTTPError) -> str:
    text = str(exc).strip()
    name = type(exc).__name__
    return f"{name}: {text}" if text else name


class UrlProber(DocumentProber):
    """Sondeo con reintentos de una URL, usando un `httpx.AsyncClient` compartido."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: AppSettings | None = None,
        *,
        marker: bytes = PDF_MAGIC,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self._client = client
        self._settings = settings or AppSettings()
        self._marker = marker
        self._sleep = sleep

    async def probe(
        self,
        url: str,
        *,
        max_attempts: int | None = None,
        timeout: float | None = None,
    ) -> ProbeResult:
        if max_attempts is None:
            max_attempts = self._settings.probe_max_attempts
        if timeout is None:
            timeout = self._settings.probe_timeout_seconds
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

        attempt = 1
        while True:
            try:
                return await self._attempt(url, attempt=attempt, timeout=timeout)
            except ProbeTransportError as error:
                log_with_context(
                    logger,
                    logging.DEBUG,
                    "Probe attempt failed",
                    url=url,
                    attempt=attempt,
                    error=error.reason,
                )
                if self._is_definitive(error):
                    return ProbeResult(url=url, verified=False, attempts=attempt, last_error=error.reason)
                if attempt >= max_attempts:
                    return ProbeResult(url=url, verified=False, attempts=attempt, last_error=error.reason)

            delay = self._settings.probe_backoff_seconds * attempt
            logger.debug("Retrying %s in %.1fs (attempt %d/%d)", url, delay, attempt + 1, max_attempts)
            await self._sleep(delay)
            attempt += 1

    async def _attempt(self, url: str, *, attempt: int, timeout: float) -> ProbeResult:
        try:
            head = await fetch_head_bytes(
                self._client,
                url,
                size=len(self._marker),
                timeout=timeout,
            )
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise ProbeTransportError(url, f"HTTP {status}", status_code=status) from exc
        except httpx.HTTPError as exc:
            raise ProbeTransportError(url, _describe(exc)) from exc
        except httpx.InvalidURL as exc:
            raise ProbeTransportError(url, f"InvalidURL: {exc}", definitive=True) from exc

        verified = is_valid_document(head, self._marker)
        return ProbeResult(url=url, verified=verified, attempts=attempt)

    def _is_definitive(self, error: ProbeTransportError) -> bool:
        if error.definitive:
            return True
        # 4xx only counts as "not this URL" when the policy says so.
        if self._settings.retry_client_errors or error.status_code is None:
            return False
        return 400 <= error.status_code < 500
