"""CLI de diagnóstico (typer + rich).

No es parte del Core: sirve para probar un endpoint a mano y ver cómo se
clasifica su respuesta.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from cli import doctor
from cli.ui_components import build_response_table, print_banner
from core.config import AppSettings
from core.domain.api_model import ApiModel
from core.domain.models import HttpMethod, RequestResponseNamespace
from core.domain.response import ApiModelResponse
from core.services.call_builder import build_call
from core.services.context_factory import build_default_context
from core.services.resource_client import ApiResource

app = typer.Typer(no_args_is_help=True, help="Declarative REST resource binding: diagnostics CLI.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_LOGGING_CONFIGURED = False


def _configure_logging(verbose: bool) -> None:
    """Configure Rich-backed logging once for CLI commands."""
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
    )
    _LOGGING_CONFIGURED = True


class RawResource(ApiModel):
    """Modelo sin campos: solo interesa la clasificación y el payload crudo."""


def parse_params(values: list[str]) -> dict[str, Any]:
    params: dict[str, Any] = {}
    for item in values:
        if "=" not in item:
            raise typer.BadParameter(f"Expected key=value, got '{item}'")
        key, value = item.split("=", 1)
        params[key.strip()] = value
    return params


async def _perform(method: HttpMethod, path: str, params: dict[str, Any], namespace: str | None) -> ApiModelResponse[Any]:
    settings = AppSettings()
    context = build_default_context(settings)
    resource = ApiResource(RawResource, context)
    call = build_call(method, path, params, RequestResponseNamespace.symmetric(namespace))
    try:
        return await resource.perform(call)
    finally:
        transport = context.transport
        aclose = getattr(transport, "aclose", None)
        if aclose is not None:
            await aclose()


@app.command()
def call(
    method: HttpMethod = typer.Argument(..., case_sensitive=False, help="GET, POST, PUT or DELETE."),
    path: str = typer.Argument(..., help="Path relative to the configured host, or an absolute URL."),
    param: list[str] = typer.Option([], "--param", "-p", help="key=value parameter (repeatable)."),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n", help="Response namespace key."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Skip the banner."),
) -> None:
    """Dispatch one call and print how its response is classified."""

    _configure_logging(verbose)
    if not quiet:
        print_banner(_console)

    response = asyncio.run(_perform(method, path, parse_params(param), namespace))
    _console.print(build_response_table(response))
    if response.has_errors:
        raise typer.Exit(code=1)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
