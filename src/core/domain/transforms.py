"""Transforms de wire -> modelo local.

Cada campo del `from_json_mapping()` de un modelo apunta a un transform que
convierte el valor JSON al tipo del campo. Un valor no convertible da el
"vacío" del transform en lugar de lanzar: una respuesta con un campo raro no
debe tirar abajo la materialización del resto.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, Any, Mapping, Protocol, runtime_checkable

if TYPE_CHECKING:
    from core.interfaces.model import BindableModel


@runtime_checkable
class Transform(Protocol):
    def perform(self, value: Any) -> Any:
        ...


JSONMapping = Mapping[str, Transform]


class StringTransform:
    def perform(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        return str(value)


class ApiIdTransform:
    """Ids que llegan como número o string; localmente siempre string."""

    def perform(self, value: Any) -> str:
        if value is None or isinstance(value, bool):
            return ""
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)


class IntTransform:
    def perform(self, value: Any) -> int:
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, (int, float)):
            return int(value)
        if isinstance(value, str):
            try:
                return int(float(value.strip()))
            except ValueError:
                return 0
        return 0


class FloatTransform:
    def perform(self, value: Any) -> float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value.strip())
            except ValueError:
                return 0.0
        return 0.0


class BoolTransform:
    _TRUE = frozenset({"true", "1", "yes", "y", "t"})

    def perform(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return value != 0
        if isinstance(value, str):
            return value.strip().lower() in self._TRUE
        return False


class DateTransform:
    """ISO-8601 -> `datetime` (UTC si no trae zona). `None` si no parsea."""

    def perform(self, value: Any) -> datetime | None:
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
        if not isinstance(value, str) or not value.strip():
            return None
        text = value.strip()
        # fromisoformat no acepta "Z" en versiones anteriores a 3.11.
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed


class ModelTransform:
    """Relación has-one: el valor anidado se materializa como otro modelo."""

    def __init__(self, model_cls: type["BindableModel"]) -> None:
        self.model_cls = model_cls

    def perform(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return self.model_cls.from_api(value)
        return self.model_cls.from_api({})


class ArrayTransform:
    """Relación has-many. Las entradas que no son objetos se ignoran."""

    def __init__(self, model_cls: type["BindableModel"]) -> None:
        self.model_cls = model_cls

    def perform(self, value: Any) -> list[Any]:
        if not isinstance(value, list):
            return []
        return [self.model_cls.from_api(item) for item in value if isinstance(item, Mapping)]
