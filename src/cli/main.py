"""CLI principal (Typer).

Hace de "host" del resolver: normaliza la entrada, muestra progreso y
errores, y guarda el PDF cuando el resultado es exitoso.
"""

from __future__ import annotations

import asyncio
import json
import re
import signal
from pathlib import Path
from typing import Optional, Sequence

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.file_saver import save_bytes_as_file
from adapters.template_lists import resolve_template_groups
from cli.doctor import app as doctor_app
from cli.ui_components import (
    build_debug_panel,
    build_templates_table,
    build_trace_table,
    print_banner,
)
from core.config import AppSettings
from core.domain.models import (
    IDENTIFIER_LENGTH,
    OutcomeStatus,
    ResolutionOutcome,
    TemplateGroup,
)
from core.log import configure_logging
from core.services.document_resolver import resolve_and_download

app = typer.Typer(
    no_args_is_help=True,
    help="Download product specification PDFs by 12NC (12-digit numerical code).",
)
app.add_typer(doctor_app, name="doctor")

_console = Console()

INVALID_INPUT_MESSAGE = "Please enter a valid 12NC (12 digits)"
NOT_FOUND_MESSAGE = "Could not find the PDF. Please check the 12NC and try again."

EXIT_NOT_FOUND = 1
EXIT_INVALID_INPUT = 2
EXIT_SAVE_FAILED = 3
EXIT_CANCELLED = 130


def normalize_identifier(raw: str) -> str:
    """Keep digits only, truncated to 12 (e.g. '9114-0151-0832' -> '911401510832')."""

    return re.sub(r"\D", "", raw)[:IDENTIFIER_LENGTH]


def _load_groups(settings: AppSettings, path: Path | None) -> list[TemplateGroup]:
    try:
        return resolve_template_groups(settings, path=path)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        raise typer.BadParameter(f"invalid templates file: {exc}", param_hint="--templates") from exc


async def _resolve_until_interrupted(
    identifier: str,
    *,
    settings: AppSettings,
    groups: Sequence[TemplateGroup],
) -> ResolutionOutcome:
    """Ctrl-C stops the walk at the next candidate instead of killing the run."""

    cancel_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, cancel_event.set)
        handler_installed = True
    except (NotImplementedError, RuntimeError):
        # Windows / non-main thread: Ctrl-C raises KeyboardInterrupt instead.
        handler_installed = False
    try:
        return await resolve_and_download(
            identifier,
            settings=settings,
            groups=groups,
            cancel_event=cancel_event,
        )
    finally:
        if handler_installed:
            loop.remove_signal_handler(signal.SIGINT)


@app.command()
def fetch(
    twelvenc: str = typer.Argument(..., help="12NC of the product, e.g. 911401510832."),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        "-o",
        file_okay=False,
        help="Where to save the PDF (default: SPECSHEET_OUTPUT_DIR or cwd).",
    ),
    templates: Optional[Path] = typer.Option(
        None,
        "--templates",
        exists=True,
        dir_okay=False,
        help="JSON file with URL template groups.",
    ),
    debug: bool = typer.Option(False, "--debug", help="Show the probe trace even on success."),
    no_retry_4xx: bool = typer.Option(
        False,
        "--no-retry-4xx",
        help="Treat 4xx responses as 'not this URL' instead of retrying them.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every probe attempt."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Skip the banner."),
) -> None:
    """Resolve a 12NC and save its specification PDF."""

    settings = AppSettings()
    if no_retry_4xx:
        settings = settings.model_copy(update={"retry_client_errors": False})
    configure_logging("DEBUG" if verbose else settings.log_level)

    if not quiet:
        print_banner(_console)

    identifier = normalize_identifier(twelvenc)
    if len(identifier) != IDENTIFIER_LENGTH:
        _console.print(f"[red]{INVALID_INPUT_MESSAGE}[/red]")
        raise typer.Exit(code=EXIT_INVALID_INPUT)

    groups = _load_groups(settings, templates)

    try:
        with _console.status(f"Downloading {identifier}..."):
            outcome = asyncio.run(
                _resolve_until_interrupted(identifier, settings=settings, groups=groups)
            )
    except KeyboardInterrupt:
        _console.print("[yellow]Cancelled.[/yellow]")
        raise typer.Exit(code=EXIT_CANCELLED)

    if outcome.ok and outcome.payload is not None and outcome.suggested_filename is not None:
        target_dir = output_dir or settings.output_dir
        try:
            path = save_bytes_as_file(outcome.payload, outcome.suggested_filename, target_dir)
        except OSError as exc:
            _console.print(f"[red]Could not save the PDF to {target_dir}: {exc}[/red]")
            raise typer.Exit(code=EXIT_SAVE_FAILED)
        if debug:
            _console.print(build_trace_table(outcome.trace))
            _console.print(build_debug_panel(outcome))
        _console.print(f"[green]Saved[/green] {path} [dim]({outcome.source_url})[/dim]")
        return

    _console.print(build_trace_table(outcome.trace))
    if debug:
        _console.print(build_debug_panel(outcome))

    if outcome.status is OutcomeStatus.CANCELLED:
        _console.print("[yellow]Cancelled.[/yellow]")
        raise typer.Exit(code=EXIT_CANCELLED)
    if outcome.status is OutcomeStatus.INVALID_IDENTIFIER:
        _console.print(f"[red]{INVALID_INPUT_MESSAGE}[/red]")
        raise typer.Exit(code=EXIT_INVALID_INPUT)
    if outcome.status is OutcomeStatus.NOT_FOUND:
        _console.print(f"[red]{NOT_FOUND_MESSAGE}[/red]")
    else:
        _console.print(f"[red]{outcome.message}[/red]")
    raise typer.Exit(code=EXIT_NOT_FOUND)


@app.command(name="templates")
def list_templates(
    templates: Optional[Path] = typer.Option(
        None,
        "--templates",
        exists=True,
        dir_okay=False,
        help="JSON file with URL template groups.",
    ),
) -> None:
    """Show the URL template groups in the order they are tried."""

    settings = AppSettings()
    groups = _load_groups(settings, templates)
    _console.print(build_templates_table(groups))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
