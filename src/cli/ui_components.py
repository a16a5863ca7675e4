"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `fetch`, `templates` y `doctor`.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ProbeResult, ResolutionOutcome, TemplateGroup
from core.services.outcome_reporter import describe_probe, format_trace


def print_banner(console: Console) -> None:
    title = Text("specsheet-fetch", style="bold cyan")
    subtitle = Text("12NC -> specification PDF", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_trace_table(trace: Sequence[ProbeResult]) -> Table:
    """Una fila por candidato sondeado, en orden de prueba."""

    table = Table(title="Probed URLs")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("URL", style="magenta", overflow="fold")
    table.add_column("Verified", no_wrap=True)
    table.add_column("Attempts", justify="right")
    table.add_column("Result", style="white")
    for index, result in enumerate(trace, start=1):
        verified = Text("yes", style="green") if result.verified else Text("no", style="red")
        table.add_row(str(index), result.url, verified, str(result.attempts), describe_probe(result))
    return table


def build_debug_panel(outcome: ResolutionOutcome) -> Panel:
    """Panel 'Debug Information' con la traza en texto plano."""

    body = Text(format_trace(outcome.trace, message=outcome.message) or outcome.message)
    return Panel(body, title=Text("Debug Information", style="bold yellow"), border_style="yellow")


def build_templates_table(groups: Sequence[TemplateGroup]) -> Table:
    table = Table(title="URL Templates")
    table.add_column("Group", style="cyan", no_wrap=True)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Template", style="white", overflow="fold")
    for group in groups:
        for index, template in enumerate(group.templates, start=1):
            table.add_row(group.name if index == 1 else "", str(index), template)
    return table
