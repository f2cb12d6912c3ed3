"""Construcción de `ApiContext`.

Por qué aquí y no en `core.context`:
- El contexto es un contrato puro; armarlo con httpx y el store en memoria
  es cableado de adaptadores, igual que el resto de servicios del Core.
"""

from __future__ import annotations

from typing import Any

import httpx

from adapters.http_client import HttpxTransport, build_async_client
from adapters.json_parser import JsonResponseParser
from adapters.persistence import InMemoryStore
from core.config import ApiConfig, AppSettings
from core.context import ApiContext
from core.interfaces.persistence import PersistenceStore
from core.interfaces.transport import HttpTransport
from core.services.request_logging import log_request_finished, log_request_started


def build_default_context(
    settings: AppSettings | None = None,
    *,
    transport: HttpTransport | None = None,
    store: PersistenceStore | None = None,
) -> ApiContext:
    """Contexto de proceso: config desde el entorno, parser JSON y hooks de logging."""

    settings = settings or AppSettings()
    return ApiContext(
        config=ApiConfig.from_settings(settings, parser=JsonResponseParser()),
        transport=transport or HttpxTransport(settings=settings),
        store=store or InMemoryStore(),
        before_hooks=(log_request_started,),
        after_hooks=(log_request_finished,),
    )


def build_test_context(
    handler: Any,
    *,
    host: str = "http://example.test",
    store: PersistenceStore | None = None,
    **config_changes: Any,
) -> ApiContext:
    """Contexto aislado para tests: `handler(request) -> httpx.Response`.

    No lee variables de entorno ni `.env`.
    """

    settings = AppSettings.model_construct(
        host=host,
        root_namespace="",
        request_logging=False,
        http_timeout_seconds=5.0,
        user_agent="restbind-tests",
    )
    client = build_async_client(settings, transport=httpx.MockTransport(handler))
    config = ApiConfig(host=host, parser=JsonResponseParser())
    if config_changes:
        config = config.customize(**config_changes)
    return ApiContext(
        config=config,
        transport=HttpxTransport(client),
        store=store or InMemoryStore(),
        before_hooks=(log_request_started,),
        after_hooks=(log_request_finished,),
    )
