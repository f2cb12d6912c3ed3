"""Normalización del campo `errors` de una respuesta.

Conviven dos formas en los servidores:
- Actual: lista de objetos (`[{"title": "must not be blank!"}, ...]`) o de
  strings sueltos.
- Legacy: objeto `campo -> [mensajes]`, donde `"base"` son mensajes no
  asociados a un campo.

Se resuelven una sola vez aquí; el resto del código solo ve `FieldError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

BASE_KEY = "base"
GENERIC_SERVER_ERROR = "An unexpected server error occurred"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def formatted(self) -> str:
        return f"{_capitalize(self.field)}: {self.message}"

    def as_dict(self) -> dict[str, str]:
        return {self.field: self.message}


@dataclass(frozen=True)
class ErrorListPayload:
    raw: list[Any]

    def entries(self) -> list[FieldError]:
        out: list[FieldError] = []
        for item in self.raw:
            if isinstance(item, Mapping):
                for key, value in item.items():
                    out.extend(FieldError(str(key), message) for message in _messages(value))
            elif item is not None:
                out.append(FieldError(BASE_KEY, str(item)))
        return out

    @property
    def is_plain_messages(self) -> bool:
        """Solo strings: el marcador genérico de error del servidor."""

        return bool(self.raw) and all(isinstance(item, str) for item in self.raw)


@dataclass(frozen=True)
class FieldErrorsPayload:
    raw: dict[str, Any]

    def entries(self) -> list[FieldError]:
        out: list[FieldError] = []
        for key, value in self.raw.items():
            out.extend(FieldError(str(key), message) for message in _messages(value))
        return out

    def as_field_messages(self) -> dict[str, list[str]]:
        return {str(key): _messages(value) for key, value in self.raw.items()}


ErrorPayload = Union[ErrorListPayload, FieldErrorsPayload]


def parse_error_payload(tree: Any) -> ErrorPayload | None:
    """Lee `tree["errors"]` y lo clasifica. `None` si no hay errores útiles."""

    if not isinstance(tree, Mapping):
        return None
    errors = tree.get("errors")
    if isinstance(errors, list) and errors:
        return ErrorListPayload(raw=list(errors))
    if isinstance(errors, Mapping) and errors:
        return FieldErrorsPayload(raw=dict(errors))
    if isinstance(errors, str) and errors:
        return ErrorListPayload(raw=[errors])
    return None


def generic_server_payload() -> ErrorListPayload:
    return ErrorListPayload(raw=[{BASE_KEY: GENERIC_SERVER_ERROR}])


def _messages(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [str(v) for v in value if v is not None]
    return [str(value)]


def _capitalize(key: str) -> str:
    return key[:1].upper() + key[1:]
