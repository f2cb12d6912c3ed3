"""Modelos del dominio (Pydantic v2 + dataclasses).

Por qué Pydantic en el dominio:
- Nos da validación estricta y estructuras inmutables (`frozen`) para lo que
  se comparte entre llamadas: namespaces, rutas y la propia `Call`.

Por qué dataclasses para request/response:
- `ApiRequest` y `ApiResponse` viven lo que dura una llamada, los tocan los
  hooks y guardan excepciones arbitrarias; no necesitan validación.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from core.config import ApiConfig


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class RequestResponseNamespace(BaseModel):
    """Claves bajo las que se envuelven los parámetros salientes y se espera
    el payload entrante.

    Un string vacío equivale a "sin envoltorio" (compatibilidad con modelos
    antiguos que declaran `api_namespace() -> ""`).
    """

    model_config = ConfigDict(frozen=True)

    request_key: str | None = None
    response_key: str | None = None

    @field_validator("request_key", "response_key")
    @classmethod
    def _empty_is_none(cls, value: str | None) -> str | None:
        return value or None

    @classmethod
    def symmetric(cls, key: str | None) -> "RequestResponseNamespace":
        return cls(request_key=key, response_key=key)


class Call(BaseModel):
    """Una operación lógica remota. Se crea por invocación y se descarta."""

    model_config = ConfigDict(frozen=True)

    method: HttpMethod
    path: str = Field(..., min_length=1)
    parameters: dict[str, Any] = Field(default_factory=dict)
    namespace: RequestResponseNamespace = Field(default_factory=RequestResponseNamespace)


class ApiRoutes(BaseModel):
    """Tabla de rutas estilo Rails.

    Las plantillas pueden llevar placeholders `:field:` que se sustituyen con
    atributos de la instancia.
    """

    model_config = ConfigDict(frozen=True)

    index: str = ""
    create: str = ""
    show: str = ""
    update: str = ""
    destroy: str = ""

    def template_for(self, action: str) -> str:
        """Plantilla de `action` con los fallbacks REST habituales.

        `create` cae en `index`; `update`/`destroy` caen en `show`.
        Devuelve "" si no hay nada declarado.
        """

        value = getattr(self, action)
        if value:
            return value
        if action == "create":
            return self.index
        if action in ("update", "destroy"):
            return self.show
        return ""


class ResponseStatus(str, Enum):
    """Clase del status HTTP (equivalente al estado legacy del formulario)."""

    NONE = "none"
    SUCCESSFUL = "successful"
    UNAUTHORIZED = "unauthorized"
    INVALID = "invalid"
    SERVER_ERROR = "server_error"

    @classmethod
    def from_status_code(cls, status_code: int | None) -> "ResponseStatus":
        if status_code is None:
            return cls.NONE
        if 200 <= status_code <= 299:
            return cls.SUCCESSFUL
        if status_code == 401:
            return cls.UNAUTHORIZED
        if 400 <= status_code <= 499:
            return cls.INVALID
        if 500 <= status_code <= 599:
            return cls.SERVER_ERROR
        return cls.NONE


@dataclass
class ApiRequest:
    """Descriptor de la petición saliente.

    Los before-hooks pueden tocar `headers` y `user_info` (p.ej. hora de inicio).
    """

    config: "ApiConfig"
    method: HttpMethod
    path: str
    url: str
    parameters: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    user_info: dict[str, Any] = field(default_factory=dict)


@dataclass
class ApiResponse:
    """Envelope crudo del transporte.

    Solo `parsed_body` se adjunta después de que el transporte termina.
    """

    request: ApiRequest
    status_code: int | None = None
    body: str | None = None
    transport_error: BaseException | None = None
    parsed_body: Any | None = None

    @property
    def status(self) -> ResponseStatus:
        return ResponseStatus.from_status_code(self.status_code)

    @property
    def is_successful(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code <= 299

    @property
    def is_internal_server_error(self) -> bool:
        return self.status_code is not None and 500 <= self.status_code <= 599

    @property
    def is_unprocessable_entity(self) -> bool:
        return self.status_code == 422
