"""Hooks de logging de requests.

Se registran siempre en el contexto por defecto y consultan
`request.config.request_logging` en cada llamada, así que una config
derivada puede activar o apagar el logging sin reconstruir el contexto.
"""

from __future__ import annotations

import logging
import time

from core.domain.models import ApiRequest, ApiResponse

_LOGGER = logging.getLogger(__name__)

STARTED_AT_KEY = "request_started_at"


def log_request_started(request: ApiRequest) -> None:
    if not request.config.request_logging:
        return
    request.user_info[STARTED_AT_KEY] = time.monotonic()
    _LOGGER.info("%s %s with headers: %s", request.method.value, request.path, request.headers)


def log_request_finished(request: ApiRequest, response: ApiResponse) -> None:
    if not request.config.request_logging:
        return
    started_at = request.user_info.get(STARTED_AT_KEY)
    if isinstance(started_at, float):
        duration = f"{time.monotonic() - started_at:.2f}"
    else:
        duration = "?"

    _LOGGER.info(
        "%s %s finished in %s seconds with status %s",
        request.method.value,
        request.path,
        duration,
        response.status_code or 0,
    )
    if response.transport_error is not None:
        _LOGGER.warning("... Error %s", response.transport_error)
