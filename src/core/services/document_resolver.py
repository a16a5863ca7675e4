"""Candidate resolution: 12NC -> verified specification PDF.

The resolver expands each template group into concrete URLs and probes them
strictly one at a time (groups in precedence order, templates in declared
order). The first verified candidate wins and is downloaded in full with the
longer transfer timeout. Every call-level failure comes back as a
`ResolutionOutcome`; nothing here raises for a missing document.
"""

from __future__ import annotations

import asyncio
from typing import Sequence

import httpx

from adapters.http_client import build_async_client, fetch_bytes
from adapters.template_lists import resolve_template_groups
from adapters.url_prober import UrlProber
from core.config import AppSettings
from core.domain.errors import InvalidIdentifier
from core.domain.models import ResolutionOutcome, TemplateGroup, validate_identifier
from core.interfaces.prober import DocumentProber
from core.log import get_logger
from core.services.outcome_reporter import ProbeTrace
from core.signature import is_valid_document
from core.templates import DEFAULT_TEMPLATE_GROUPS

logger = get_logger(__name__)


async def resolve(
    identifier: str,
    groups: Sequence[TemplateGroup] = DEFAULT_TEMPLATE_GROUPS,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
    prober: DocumentProber | None = None,
    cancel_event: asyncio.Event | None = None,
) -> ResolutionOutcome:
    """Resolve `identifier` against `groups` and download the first verified PDF.

    A caller-supplied `client` is left open; one built here is closed before
    returning. `cancel_event` is checked between candidates only.
    """

    trace = ProbeTrace(identifier)
    try:
        validate_identifier(identifier)
    except InvalidIdentifier as exc:
        return trace.invalid_identifier(exc.message)

    settings = settings or AppSettings()
    owns_client = client is None
    http = client or build_async_client(settings)
    try:
        return await _walk_candidates(
            identifier,
            groups,
            trace=trace,
            settings=settings,
            client=http,
            prober=prober or UrlProber(http, settings),
            cancel_event=cancel_event,
        )
    finally:
        if owns_client:
            await http.aclose()


async def _walk_candidates(
    identifier: str,
    groups: Sequence[TemplateGroup],
    *,
    trace: ProbeTrace,
    settings: AppSettings,
    client: httpx.AsyncClient,
    prober: DocumentProber,
    cancel_event: asyncio.Event | None,
) -> ResolutionOutcome:
    for group in groups:
        logger.info("Trying %s templates for %s", group.name, identifier)
        for url in group.expand(identifier):
            if cancel_event is not None and cancel_event.is_set():
                return trace.cancelled()

            result = await prober.probe(url)
            trace.record(result)
            if not result.verified:
                continue

            try:
                payload = await fetch_bytes(client, url, timeout=settings.http_timeout_seconds)
            except httpx.HTTPError as exc:
                reason = str(exc).strip() or type(exc).__name__
                return trace.transfer_failed(url, reason)
            if not is_valid_document(payload):
                return trace.transfer_failed(url, "payload failed signature verification")
            return trace.success(payload, url)

    return trace.not_found()


async def resolve_and_download(
    raw_input: str,
    *,
    settings: AppSettings | None = None,
    groups: Sequence[TemplateGroup] | None = None,
    client: httpx.AsyncClient | None = None,
    prober: DocumentProber | None = None,
    cancel_event: asyncio.Event | None = None,
) -> ResolutionOutcome:
    """Entry point for hosts (CLI, scripts).

    `raw_input` should already be normalised to 12 digits; it is validated
    again here. Template groups default to `settings.templates_path` or the
    built-in tables.
    """

    settings = settings or AppSettings()
    if groups is None:
        groups = resolve_template_groups(settings)
    return await resolve(
        raw_input,
        groups,
        settings=settings,
        client=client,
        prober=prober,
        cancel_event=cancel_event,
    )
