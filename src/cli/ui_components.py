"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import json
from typing import Any

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.response import ApiModelResponse


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("restbind", style="bold cyan")
    subtitle = Text("REST resources • Namespaces • Error classification", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_response_table(response: ApiModelResponse[Any]) -> Table:
    """Resumen de un `ApiModelResponse` clasificado."""

    table = Table(title="Classified response")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    raw = response.raw_response
    if raw is not None:
        table.add_row("Request", f"{raw.request.method.value} {raw.request.url}")
    table.add_row("Status", str(response.status_code) if response.status_code is not None else "-")
    table.add_row("Classification", response.classification.value)
    table.add_row("Successful", "yes" if response.is_successful else "no")
    if response.is_transport_failure and raw is not None:
        table.add_row("Transport error", f"[red]{raw.transport_error}[/red]")
    if response.is_malformed:
        table.add_row("Body", "[yellow]not parseable[/yellow]")
    for message in response.server_error_messages or []:
        table.add_row("Server error", f"[red]{message}[/red]")
    for message in response.validation_error_messages or []:
        table.add_row("Validation error", f"[magenta]{message}[/magenta]")
    if response.extracted_object is not None:
        table.add_row("Object", json.dumps(response.extracted_object, ensure_ascii=False, indent=2))
    if response.extracted_array is not None:
        table.add_row("Array", f"{len(response.extracted_array)} item(s)")
    return table
