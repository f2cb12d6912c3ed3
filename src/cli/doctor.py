"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, save_user_settings, user_env_file

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics against the configured host."""

    settings = AppSettings()

    table = Table(title="restbind Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Host", "OK", settings.host)
    table.add_row("Root namespace", "OK", settings.root_namespace or "(none)")
    table.add_row("Encoding", "OK", settings.encoding.value)
    table.add_row("Request logging", "ON" if settings.request_logging else "OFF", "")
    env_file = user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "MISSING", str(env_file))

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings.host, settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        _console.print("\n[yellow]Note:[/yellow] run `restbind doctor setup` to point at another host.")


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores host/namespace in the user config .env)."""

    current = AppSettings()
    host = typer.prompt("API host", default=current.host, show_default=True).strip()
    root_namespace = typer.prompt(
        "Root namespace (blank for none)",
        default=current.root_namespace,
        show_default=True,
    ).strip()
    logging_on = typer.confirm("Log every request?", default=current.request_logging)

    if not host:
        raise typer.BadParameter("host is required")

    env_path = save_user_settings(
        {"host": host, "root_namespace": root_namespace, "request_logging": logging_on}
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
