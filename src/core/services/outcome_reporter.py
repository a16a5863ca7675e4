"""Outcome reporting for document resolution.

`ProbeTrace` accumulates one `ProbeResult` per probed candidate, in arrival
order, and builds the terminal `ResolutionOutcome`. It replaces the old
free-text debug log with a structured, append-only artifact; turning it into
text (`format_trace`) is left to whoever presents it.
"""

from __future__ import annotations

import logging
from typing import Iterator, Sequence

from core.domain.models import (
    OutcomeStatus,
    ProbeResult,
    ResolutionOutcome,
    suggested_filename,
)
from core.log import get_logger, log_with_context

logger = get_logger(__name__)

NOT_FOUND_MESSAGE = "Could not find the document for this identifier"


def describe_probe(result: ProbeResult) -> str:
    """One-line, human readable summary of a probe."""

    if result.verified:
        return f"PDF found (attempt {result.attempts})"
    if result.last_error:
        plural = "s" if result.attempts != 1 else ""
        return f"Error after {result.attempts} attempt{plural}: {result.last_error}"
    return "PDF not found at this URL"


def format_trace(trace: Sequence[ProbeResult], *, message: str | None = None) -> str:
    """Render a trace as diagnostic text (one block per candidate)."""

    blocks: list[str] = []
    for index, result in enumerate(trace, start=1):
        mark = "OK" if result.verified else "--"
        blocks.append(f"[{index}] Trying URL: {result.url}\n    {mark} {describe_probe(result)}")
    if message:
        blocks.append(message)
    return "\n".join(blocks)


class ProbeTrace:
    """Append-only record of the probes made during one resolution call."""

    def __init__(self, identifier: object) -> None:
        self.identifier = str(identifier)
        self._entries: list[ProbeResult] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ProbeResult]:
        return iter(tuple(self._entries))

    @property
    def entries(self) -> tuple[ProbeResult, ...]:
        return tuple(self._entries)

    def record(self, result: ProbeResult) -> None:
        self._entries.append(result)
        log_with_context(
            logger,
            logging.INFO,
            f"{result.url}: {describe_probe(result)}",
            identifier=self.identifier,
            url=result.url,
            verified=result.verified,
            attempts=result.attempts,
            last_error=result.last_error,
        )

    def render_text(self, *, message: str | None = None) -> str:
        return format_trace(self._entries, message=message)

    # Terminal outcomes ---------------------------------------------------

    def success(self, payload: bytes, source_url: str) -> ResolutionOutcome:
        filename = suggested_filename(self.identifier)
        logger.info("Downloaded %s (%d bytes) from %s", filename, len(payload), source_url)
        return ResolutionOutcome(
            status=OutcomeStatus.SUCCESS,
            identifier=self.identifier,
            message=f"Downloaded {filename}",
            trace=self.entries,
            payload=payload,
            source_url=source_url,
            suggested_filename=filename,
        )

    def not_found(self) -> ResolutionOutcome:
        return self._failure(OutcomeStatus.NOT_FOUND, NOT_FOUND_MESSAGE)

    def transfer_failed(self, source_url: str, reason: str) -> ResolutionOutcome:
        outcome = self._failure(
            OutcomeStatus.TRANSFER_FAILED,
            f"Document found but the download failed: {reason}",
        )
        return outcome.model_copy(update={"source_url": source_url})

    def cancelled(self) -> ResolutionOutcome:
        return self._failure(OutcomeStatus.CANCELLED, "Resolution cancelled")

    def invalid_identifier(self, message: str) -> ResolutionOutcome:
        return self._failure(OutcomeStatus.INVALID_IDENTIFIER, message)

    def _failure(self, status: OutcomeStatus, message: str) -> ResolutionOutcome:
        log_with_context(
            logger,
            logging.WARNING,
            message,
            identifier=self.identifier,
            status=status.value,
            probes=len(self._entries),
        )
        return ResolutionOutcome(
            status=status,
            identifier=self.identifier,
            message=message,
            trace=self.entries,
        )
