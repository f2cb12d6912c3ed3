"""Binding modelo <-> recurso REST.

Dos niveles, como en cualquier cliente estilo ActiveRecord:
- `ApiResource[ModelT]`: operaciones de clase (get/post/put/delete,
  find/find_array/create/update).
- `ApiForm[ModelT]`: una instancia enlazada (save/destroy) que además guarda
  el último status y los errores por campo.

Todas las operaciones son corrutinas: el `await` es la continuación y se
resuelve exactamente una vez con el `ApiModelResponse`. Para el estilo
callback está `run_with_callback`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Generic, Mapping, TypeVar

from core.config import ApiConfig
from core.context import ApiContext
from core.domain.api_model import route_has_placeholders
from core.domain.error_payload import BASE_KEY
from core.domain.models import Call, HttpMethod, ResponseStatus
from core.domain.response import ApiModelResponse
from core.errors import RouteNotDefinedError, RouteTemplateError
from core.interfaces.model import ModelT
from core.services.call_builder import build_call
from core.services.classifier import classify_response
from core.services.dispatcher import RequestDispatcher

_LOGGER = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")


def run_with_callback(
    operation: Awaitable[ResultT],
    callback: Callable[[ResultT], None],
) -> "asyncio.Task[ResultT]":
    """Agenda `operation` y llama a `callback` una sola vez con su resultado.

    Debe llamarse dentro de un event loop en marcha.
    """

    async def _runner() -> ResultT:
        result = await operation
        callback(result)
        return result

    return asyncio.ensure_future(_runner())


class ApiResource(Generic[ModelT]):
    """Operaciones de colección para un tipo de modelo."""

    def __init__(self, model_cls: type[ModelT], context: ApiContext) -> None:
        self.model_cls = model_cls
        self.context = context
        self._dispatcher = RequestDispatcher(context)

    @property
    def config(self) -> ApiConfig:
        api_config = getattr(self.model_cls, "api_config", None)
        if api_config is None:
            return self.context.config
        return api_config(self.context.config)

    def route(self, action: str) -> str:
        template = self.model_cls.api_routes().template_for(action)
        if not template:
            raise RouteNotDefinedError(self.model_cls.__name__, action)
        return template

    def _static_route(self, action: str) -> str:
        template = self.route(action)
        if route_has_placeholders(template):
            raise RouteTemplateError(
                f"Route '{template}' for '{action}' needs an instance to fill its placeholders"
            )
        return template

    async def perform(self, call: Call, *, config: ApiConfig | None = None) -> ApiModelResponse[ModelT]:
        response = await self._dispatcher.execute(call, config or self.config)
        return classify_response(response, call.namespace, self.model_cls)

    async def _request(
        self,
        method: HttpMethod,
        path: str,
        parameters: Mapping[str, Any] | None,
        config: ApiConfig | None,
    ) -> ApiModelResponse[ModelT]:
        call = build_call(method, path, parameters, self.model_cls.api_aware_namespace())
        return await self.perform(call, config=config)

    async def get(
        self,
        path: str,
        parameters: Mapping[str, Any] | None = None,
        *,
        config: ApiConfig | None = None,
    ) -> ApiModelResponse[ModelT]:
        return await self._request(HttpMethod.GET, path, parameters, config)

    async def post(
        self,
        path: str,
        parameters: Mapping[str, Any] | None = None,
        *,
        config: ApiConfig | None = None,
    ) -> ApiModelResponse[ModelT]:
        return await self._request(HttpMethod.POST, path, parameters, config)

    async def put(
        self,
        path: str,
        parameters: Mapping[str, Any] | None = None,
        *,
        config: ApiConfig | None = None,
    ) -> ApiModelResponse[ModelT]:
        return await self._request(HttpMethod.PUT, path, parameters, config)

    async def delete(
        self,
        path: str,
        parameters: Mapping[str, Any] | None = None,
        *,
        config: ApiConfig | None = None,
    ) -> ApiModelResponse[ModelT]:
        return await self._request(HttpMethod.DELETE, path, parameters, config)

    # active record (rails) style

    async def find(self) -> tuple[ModelT | None, ApiModelResponse[ModelT]]:
        response = await self.get(self._static_route("index"))
        return response.object, response

    async def find_array(self, path: str | None = None) -> tuple[list[ModelT], ApiModelResponse[ModelT]]:
        """Siempre devuelve una lista; "cero resultados" y "no se pudo
        extraer" se distinguen mirando la respuesta.
        """

        response = await self.get(path or self._static_route("index"))
        return list(response.array or []), response

    async def create(
        self, parameters: Mapping[str, Any] | None = None
    ) -> tuple[ModelT | None, ApiModelResponse[ModelT]]:
        response = await self.post(self._static_route("create"), parameters)
        return response.object, response

    async def update(
        self, parameters: Mapping[str, Any] | None = None
    ) -> tuple[ModelT | None, ApiModelResponse[ModelT]]:
        response = await self.put(self._static_route("update"), parameters)
        return response.object, response

    def form(self, model: ModelT) -> "ApiForm[ModelT]":
        return ApiForm(self, model)


class ApiForm(Generic[ModelT]):
    """Instancia local enlazada a su recurso remoto."""

    def __init__(self, resource: ApiResource[ModelT], model: ModelT) -> None:
        self.resource = resource
        self.model = model
        self.status: ResponseStatus = ResponseStatus.NONE
        self.errors: dict[str, list[str]] = {}

    @property
    def has_errors(self) -> bool:
        return any(self.errors.values())

    @property
    def error_messages(self) -> list[str]:
        """Formato legacy: `base` tal cual, el resto `"Campo mensaje"`."""

        out: list[str] = []
        for key, messages in self.errors.items():
            for message in messages:
                if key == BASE_KEY:
                    out.append(message)
                else:
                    out.append(f"{key[:1].upper()}{key[1:]} {message}")
        return out

    def _wrapped_parameters(self) -> dict[str, Any]:
        wire = self.model.to_wire_dictionary()
        key = self.model.api_aware_namespace().request_key
        if key is None:
            return wire
        return {key: wire}

    def _instance_route(self, action: str) -> str:
        return self.model.api_route_with_replacements(self.resource.route(action))

    async def save(self) -> ApiModelResponse[ModelT]:
        """PUT si la instancia ya existe en remoto, POST si no."""

        parameters = self._wrapped_parameters()
        if self.model.has_persisted_identity():
            response = await self.resource.put(self._instance_route("update"), parameters)
        else:
            response = await self.resource.post(self._instance_route("create"), parameters)
        self.update_from_response(response)
        return response

    async def destroy(self, parameters: Mapping[str, Any] | None = None) -> ApiModelResponse[ModelT]:
        response = await self.resource.delete(self._instance_route("destroy"), parameters)
        self.update_from_response(response)
        return response

    def update_from_form(self, parameters: Mapping[str, Any]) -> None:
        self.resource.context.store.mutate(self.model, lambda: self.model.apply_wire_update(parameters))

    def update_from_response(self, response: ApiModelResponse[ModelT]) -> None:
        if response.status_code is not None:
            self.status = response.status

        if response.extracted_object is not None:
            data = response.extracted_object
            self.resource.context.store.mutate(self.model, lambda: self.model.apply_wire_update(data))

        self.errors = response.field_errors
        if self.errors:
            _LOGGER.debug("%s errors: %s", type(self.model).__name__, self.errors)
