"""Contrato de un modelo enlazable a un recurso REST.

Por qué Protocol y no solo herencia:
- `ApiResource[ModelT]` se tipa contra esta capacidad; `core.domain.api_model.ApiModel`
  es la implementación por defecto, pero cualquier clase que cumpla el
  contrato se puede enlazar.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from core.domain.models import ApiRoutes, RequestResponseNamespace
    from core.domain.transforms import JSONMapping


@runtime_checkable
class BindableModel(Protocol):
    @classmethod
    def api_aware_namespace(cls) -> "RequestResponseNamespace":
        ...

    @classmethod
    def api_routes(cls) -> "ApiRoutes":
        ...

    @classmethod
    def from_json_mapping(cls) -> "JSONMapping":
        ...

    @classmethod
    def plural_namespace(cls) -> str | None:
        ...

    @classmethod
    def from_api(cls: type["ModelT"], data: Mapping[str, Any]) -> "ModelT":
        ...

    def to_wire_dictionary(self) -> dict[str, Any]:
        ...

    def apply_wire_update(self, data: Mapping[str, Any]) -> None:
        ...

    def has_persisted_identity(self) -> bool:
        ...

    def api_route_with_replacements(self, template: str) -> str:
        ...


ModelT = TypeVar("ModelT", bound=BindableModel)
