"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y la codificación de parámetros.
- Es la única pieza que hace I/O de red; el Core solo ve `HttpTransport`.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import urlencode

import httpx

from core.config import AppSettings, RequestEncoding
from core.domain.models import ApiRequest, ApiResponse, HttpMethod

_LOGGER = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las llamadas se comporten igual.
    - Permite inyectar un transporte (mock) sin tocar el resto.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def _query_params(parameters: dict[str, Any]) -> dict[str, Any]:
    """httpx no serializa dicts anidados en query; se mandan como JSON."""

    out: dict[str, Any] = {}
    for key, value in parameters.items():
        if isinstance(value, dict) or (
            isinstance(value, list) and not all(isinstance(v, (str, int, float)) for v in value)
        ):
            out[key] = json.dumps(value)
        elif isinstance(value, bool):
            out[key] = "true" if value else "false"
        else:
            out[key] = value
    return out


def _form_fields(parameters: dict[str, Any], prefix: str = "") -> list[tuple[str, str]]:
    """Aplana a la convención Rails: `post[title]=...`, `tags[]=...`."""

    fields: list[tuple[str, str]] = []
    for key, value in parameters.items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if isinstance(value, dict):
            fields.extend(_form_fields(value, name))
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, dict):
                    fields.extend(_form_fields(item, f"{name}[]"))
                else:
                    fields.append((f"{name}[]", _form_scalar(item)))
        else:
            fields.append((name, _form_scalar(value)))
    return fields


def _form_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class HttpxTransport:
    """`HttpTransport` sobre `httpx.AsyncClient`.

    Los `httpx.HTTPError` se devuelven en `transport_error`; si hubo respuesta
    se conservan status y cuerpo.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        settings: AppSettings | None = None,
    ) -> None:
        self._client = client or build_async_client(settings)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _request_kwargs(self, request: ApiRequest) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"headers": request.headers}
        if not request.parameters:
            return kwargs
        if request.method in (HttpMethod.GET, HttpMethod.DELETE):
            kwargs["params"] = _query_params(request.parameters)
        elif request.config.encoding is RequestEncoding.URL:
            kwargs["content"] = urlencode(_form_fields(request.parameters))
            kwargs["headers"] = {
                **request.headers,
                "Content-Type": "application/x-www-form-urlencoded",
            }
        else:
            kwargs["json"] = request.parameters
        return kwargs

    async def execute(self, request: ApiRequest) -> ApiResponse:
        response = ApiResponse(request=request)
        try:
            http_response = await self._client.request(
                request.method.value,
                request.url,
                **self._request_kwargs(request),
            )
        except httpx.HTTPError as exc:
            _LOGGER.debug("Transport error on %s %s: %s", request.method.value, request.url, exc)
            response.transport_error = exc
            return response

        response.status_code = http_response.status_code
        response.body = http_response.text
        return response
