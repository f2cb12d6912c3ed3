"""Base declarativa para modelos enlazados a un recurso REST.

Por qué una base Pydantic:
- Los modelos locales ya son `BaseModel` (defaults, tipado, `model_dump`).
- La base aporta la forma en el wire: namespace, rutas y mapping de campos.

Un modelo típico:

    class Post(ApiModel):
        id: str = ""
        title: str = ""

        @classmethod
        def api_namespace(cls) -> str:
            return "post"

        @classmethod
        def api_routes(cls) -> ApiRoutes:
            return ApiRoutes(index="/posts.json", show="/posts/:id:.json")

        @classmethod
        def from_json_mapping(cls) -> JSONMapping:
            return {"id": ApiIdTransform(), "title": StringTransform()}
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict

from core.config import ApiConfig
from core.domain.models import ApiRoutes, RequestResponseNamespace
from core.domain.transforms import JSONMapping
from core.errors import RouteTemplateError

_PLACEHOLDER_RE = re.compile(r":([A-Za-z_][A-Za-z0-9_]*):")

_M = TypeVar("_M", bound="ApiModel")


class ApiModel(BaseModel):
    """Modelo local con declaración de wire.

    Todos los campos deben tener default: `from_api` construye la instancia
    vacía y luego aplica el mapping.
    """

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def api_namespace(cls) -> str:
        """Namespace singular (`"post"`, no `"posts"`). "" = sin envoltorio."""

        return ""

    @classmethod
    def api_aware_namespace(cls) -> RequestResponseNamespace:
        return RequestResponseNamespace.symmetric(cls.api_namespace())

    @classmethod
    def plural_namespace(cls) -> str | None:
        """Plural explícito si la regla por defecto no sirve."""

        return None

    @classmethod
    def api_routes(cls) -> ApiRoutes:
        return ApiRoutes()

    @classmethod
    def api_config(cls, base: ApiConfig) -> ApiConfig:
        """Config específica del tipo; por defecto la compartida sin cambios."""

        return base

    @classmethod
    def from_json_mapping(cls) -> JSONMapping:
        return {}

    @classmethod
    def from_api(cls: type[_M], data: Mapping[str, Any]) -> _M:
        model = cls()
        model.apply_wire_update(data)
        return model

    def to_wire_dictionary(self) -> dict[str, Any]:
        """Forma serializada para el servidor.

        Por defecto: los campos del mapping (o todos si no hay mapping) en modo
        JSON. Los modelos anidados se serializan con su propio `to_wire_dictionary`.
        """

        mapping = self.from_json_mapping()
        names = list(mapping) if mapping else list(type(self).model_fields)
        out: dict[str, Any] = {}
        for name in names:
            if not hasattr(self, name):
                continue
            out[name] = _to_wire_value(getattr(self, name))
        return out

    def apply_wire_update(self, data: Mapping[str, Any]) -> None:
        """Overwrite-merge: cada clave presente en `data` y en el mapping
        sobrescribe el campo local; lo ausente queda intacto.
        """

        for name, transform in self.from_json_mapping().items():
            if name not in data:
                continue
            setattr(self, name, transform.perform(data[name]))

    def has_persisted_identity(self) -> bool:
        """Marca de identidad remota: por defecto, un `id` no vacío."""

        return bool(getattr(self, "id", None))

    def api_route_with_replacements(self, template: str) -> str:
        def _replace(match: re.Match[str]) -> str:
            name = match.group(1)
            if name not in type(self).model_fields and not hasattr(self, name):
                raise RouteTemplateError(
                    f"Route '{template}' references unknown field '{name}' on {type(self).__name__}"
                )
            value = getattr(self, name)
            return "" if value is None else str(value)

        return _PLACEHOLDER_RE.sub(_replace, template)


def _to_wire_value(value: Any) -> Any:
    if isinstance(value, ApiModel):
        return value.to_wire_dictionary()
    if isinstance(value, (list, tuple)):
        return [_to_wire_value(item) for item in value]
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    return value


def route_has_placeholders(template: str) -> bool:
    return bool(_PLACEHOLDER_RE.search(template))
