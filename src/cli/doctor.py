"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from pathlib import Path
from urllib.parse import urlsplit

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.template_lists import resolve_template_groups
from core.config import AppSettings, write_user_env_vars
from core.domain.models import TemplateGroup

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def template_hosts(groups: list[TemplateGroup]) -> list[str]:
    """Unique `scheme://host` origins, in the order the templates use them."""

    hosts: list[str] = []
    for group in groups:
        for template in group.templates:
            parts = urlsplit(template)
            origin = f"{parts.scheme}://{parts.netloc}"
            if origin not in hosts:
                hosts.append(origin)
    return hosts


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url, timeout=httpx.Timeout(settings.probe_timeout_seconds))
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or type(exc).__name__


async def _check_hosts(hosts: list[str], settings: AppSettings) -> list[tuple[str, bool, str]]:
    results: list[tuple[str, bool, str]] = []
    for host in hosts:
        ok, detail = await _check_http(host, settings)
        results.append((host, ok, detail))
    return results


@app.command()
def run() -> None:
    """Run baseline diagnostics and show the effective configuration."""

    settings = AppSettings()

    table = Table(title="specsheet-fetch Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row(
        "Probe policy",
        "OK",
        f"{settings.probe_max_attempts} attempts, {settings.probe_timeout_seconds:g}s timeout, "
        f"{settings.probe_backoff_seconds:g}s backoff",
    )
    table.add_row("Transfer timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row(
        "4xx responses",
        "OK",
        "retried" if settings.retry_client_errors else "treated as not found",
    )
    table.add_row("Output dir", "OK", str(settings.output_dir.resolve()))

    try:
        groups = resolve_template_groups(settings)
    except (OSError, ValueError) as exc:
        table.add_row("Templates", "FAIL", str(exc))
        _console.print(table)
        raise typer.Exit(code=1)

    source = str(settings.templates_path) if settings.templates_path else "built-in"
    total = sum(len(group.templates) for group in groups)
    table.add_row("Templates", "OK", f"{len(groups)} groups, {total} templates ({source})")

    # Connectivity (best-effort)
    for host, ok, detail in asyncio.run(_check_hosts(template_hosts(groups), settings)):
        table.add_row(f"HTTP {urlsplit(host).netloc}", "OK" if ok else "FAIL", detail)

    _console.print(table)


@app.command()
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    output_dir = typer.prompt(
        "Output directory",
        default=str(settings.output_dir),
        show_default=True,
    ).strip()
    templates_path = typer.prompt(
        "Templates JSON (empty for built-in)",
        default=str(settings.templates_path or ""),
        show_default=False,
    ).strip()
    retry_4xx = typer.confirm("Retry 4xx responses?", default=settings.retry_client_errors)

    if templates_path and not Path(templates_path).is_file():
        raise typer.BadParameter(f"templates file not found: {templates_path}")

    env_path = write_user_env_vars(
        {
            "SPECSHEET_OUTPUT_DIR": output_dir,
            "SPECSHEET_TEMPLATES_PATH": templates_path or None,
            "SPECSHEET_RETRY_CLIENT_ERRORS": "true" if retry_4xx else "false",
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
