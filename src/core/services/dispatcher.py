"""Despacho de una `Call` contra el transporte.

Responsabilidad:
- Armar el `ApiRequest`, correr los before-hooks, esperar al transporte,
  correr los after-hooks y adjuntar el cuerpo parseado.
- Es el único punto del Core que espera I/O de red.
"""

from __future__ import annotations

import logging

from core.config import ApiConfig
from core.context import ApiContext
from core.domain.models import ApiRequest, ApiResponse, Call
from core.errors import ParserNotConfiguredError, TransportError
from core.services.namespace_resolver import fetch_path

_LOGGER = logging.getLogger(__name__)


def build_url(host: str, path: str) -> str:
    if path.startswith(("http://", "https://")):
        return path
    return f"{host.rstrip('/')}/{path.lstrip('/')}"


class RequestDispatcher:
    def __init__(self, context: ApiContext) -> None:
        self._context = context

    def build_request(self, call: Call, config: ApiConfig) -> ApiRequest:
        if config.parser is None:
            raise ParserNotConfiguredError("ApiConfig has no response parser")
        return ApiRequest(
            config=config,
            method=call.method,
            path=call.path,
            url=build_url(config.host, call.path),
            parameters=dict(call.parameters),
            headers=dict(config.headers),
        )

    async def execute(self, call: Call, config: ApiConfig | None = None) -> ApiResponse:
        config = config or self._context.config
        request = self.build_request(call, config)

        for hook in self._context.before_hooks:
            hook(request)

        try:
            response = await self._context.transport.execute(request)
        except TransportError as exc:
            response = ApiResponse(
                request=request,
                status_code=exc.status_code,
                body=exc.body,
                transport_error=exc,
            )

        for hook in self._context.after_hooks:
            hook(request, response)

        response.parsed_body = self._parse(response, config)
        return response

    def _parse(self, response: ApiResponse, config: ApiConfig) -> object | None:
        if not response.body:
            return None
        assert config.parser is not None
        parsed = config.parser.parse(response.body)
        if parsed is None:
            _LOGGER.debug("Body of %s %s is not structured", response.request.method.value, response.request.path)
            return None
        if config.root_namespace and isinstance(parsed, dict):
            # Sin el envoltorio (p.ej. un error que viene sin "data"), se usa tal cual.
            nested = fetch_path(parsed, config.root_namespace)
            return parsed if nested is None else nested
        return parsed
