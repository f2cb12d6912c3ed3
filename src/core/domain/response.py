"""Resultado clasificado de una llamada.

Por qué un único objeto:
- El pipeline nunca lanza por fallos esperados; el caller recibe siempre
  esto y decide con los predicados (`is_successful`, `has_server_error`...).
- Dos canales de error que nunca se mezclan: `server_errors` (opacos, de
  infraestructura) y `validation_errors` (por campo, culpa del input).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from core.domain.error_payload import ErrorPayload, FieldError, FieldErrorsPayload
from core.domain.models import ApiResponse, ResponseStatus

ModelT = TypeVar("ModelT")


class Classification(str, Enum):
    NONE = "none"
    SUCCESSFUL = "successful"
    VALIDATION_FAILURE = "validation_failure"
    SERVER_FAILURE = "server_failure"
    UNAUTHORIZED = "unauthorized"
    CLIENT_ERROR = "client_error"


@dataclass
class ApiModelResponse(Generic[ModelT]):
    raw_response: ApiResponse | None
    classification: Classification = Classification.NONE
    parsed_body: Any | None = None
    error_payload: ErrorPayload | None = None
    extracted_object: dict[str, Any] | None = None
    extracted_array: list[Any] | None = None
    server_errors: Any | None = None
    server_error_entries: list[FieldError] | None = None
    validation_errors: list[FieldError] | None = None
    object: ModelT | None = None
    array: list[ModelT] | None = None
    is_malformed: bool = False

    @property
    def status_code(self) -> int | None:
        return self.raw_response.status_code if self.raw_response else None

    @property
    def status(self) -> ResponseStatus:
        return ResponseStatus.from_status_code(self.status_code)

    @property
    def has_server_error(self) -> bool:
        return bool(self.server_error_entries)

    @property
    def has_validation_errors(self) -> bool:
        return bool(self.validation_errors)

    @property
    def has_errors(self) -> bool:
        return self.has_server_error or self.has_validation_errors

    @property
    def is_successful(self) -> bool:
        return self.classification is Classification.SUCCESSFUL and not self.has_errors

    @property
    def is_unauthorized(self) -> bool:
        return self.classification is Classification.UNAUTHORIZED

    @property
    def is_client_error(self) -> bool:
        return self.classification is Classification.CLIENT_ERROR

    @property
    def is_transport_failure(self) -> bool:
        return self.raw_response is not None and self.raw_response.transport_error is not None

    @property
    def server_error_messages(self) -> list[str] | None:
        if not self.server_error_entries:
            return None
        return [entry.formatted() for entry in self.server_error_entries]

    @property
    def validation_error_messages(self) -> list[str] | None:
        if not self.validation_errors:
            return None
        return [entry.formatted() for entry in self.validation_errors]

    @property
    def field_errors(self) -> dict[str, list[str]]:
        """Errores agrupados por campo (forma legacy `campo -> [mensajes]`)."""

        if isinstance(self.error_payload, FieldErrorsPayload) and self.has_validation_errors:
            return self.error_payload.as_field_messages()
        grouped: dict[str, list[str]] = {}
        for entry in (self.validation_errors or []) + (self.server_error_entries or []):
            grouped.setdefault(entry.field, []).append(entry.message)
        return grouped
