"""Clasificación de la respuesta y extracción del payload.

Orden de decisión (el primero que aplica gana):

1. Error de transporte sin cuerpo utilizable -> SERVER_FAILURE genérico.
2. 5xx -> SERVER_FAILURE con `errors` del cuerpo, o el genérico.
3. 422, o `errors` con forma legacy `campo -> [mensajes]` -> VALIDATION_FAILURE.
4. `errors` como lista de strings -> SERVER_FAILURE (marcador genérico).
5. 401 -> UNAUTHORIZED; otro 4xx -> CLIENT_ERROR; 2xx -> SUCCESSFUL.
6. Sin status -> NONE.

`errors` se busca primero en la raíz del cuerpo y, si no está, dentro del
objeto extraído (servidores legacy: `{"post": {..., "errors": {...}}}`).

La extracción del objeto/array se intenta siempre, también en errores: un
422 puede devolver el recurso saneado junto a los errores. Sin namespace de
respuesta, un cuerpo de error (4xx/5xx que no sea 422) no se materializa.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from core.domain.error_payload import (
    ErrorListPayload,
    ErrorPayload,
    FieldErrorsPayload,
    generic_server_payload,
    parse_error_payload,
)
from core.domain.models import ApiResponse, RequestResponseNamespace
from core.domain.response import ApiModelResponse, Classification
from core.interfaces.model import ModelT
from core.services.namespace_resolver import resolve_array, resolve_object

_LOGGER = logging.getLogger(__name__)


def classify_response(
    response: ApiResponse,
    namespace: RequestResponseNamespace,
    model_cls: type[ModelT],
) -> ApiModelResponse[ModelT]:
    parsed = response.parsed_body
    result: ApiModelResponse[ModelT] = ApiModelResponse(raw_response=response, parsed_body=parsed)
    result.is_malformed = bool(response.body and response.body.strip()) and parsed is None

    obj, array = _locate(response, parsed, namespace, model_cls)
    payload = parse_error_payload(parsed) or parse_error_payload(obj)
    result.error_payload = payload
    status = response.status_code

    if response.transport_error is not None and not isinstance(parsed, (Mapping, list)):
        _set_server_errors(result, generic_server_payload())
    elif response.is_internal_server_error:
        _set_server_errors(result, payload or generic_server_payload())
    elif response.is_unprocessable_entity or isinstance(payload, FieldErrorsPayload):
        result.classification = Classification.VALIDATION_FAILURE
        if payload is not None:
            result.validation_errors = payload.entries()
    elif isinstance(payload, ErrorListPayload) and payload.is_plain_messages:
        _set_server_errors(result, payload)
    elif status == 401:
        result.classification = Classification.UNAUTHORIZED
    elif status is not None and 400 <= status <= 499:
        result.classification = Classification.CLIENT_ERROR
    elif response.is_successful:
        result.classification = Classification.SUCCESSFUL
    else:
        result.classification = Classification.NONE

    if obj is not None:
        result.extracted_object = obj
        result.object = model_cls.from_api(obj)
    elif array is not None:
        result.extracted_array = array
        result.array = [model_cls.from_api(item) for item in array if isinstance(item, Mapping)]

    if result.is_malformed:
        _LOGGER.debug("Unparseable body for %s %s", response.request.method.value, response.request.path)
    return result


def _set_server_errors(result: ApiModelResponse[Any], payload: ErrorPayload) -> None:
    result.classification = Classification.SERVER_FAILURE
    result.server_errors = payload.raw
    result.server_error_entries = payload.entries()


def _locate(
    response: ApiResponse,
    parsed: Any,
    namespace: RequestResponseNamespace,
    model_cls: type[ModelT],
) -> tuple[dict[str, Any] | None, list[Any] | None]:
    if parsed is None:
        return None, None

    key = namespace.response_key
    if key is None:
        if _is_error_status(response):
            return None, None
        return _unwrapped(parsed)

    plural = model_cls.plural_namespace()
    obj = resolve_object(parsed, key, plural=plural)
    if obj is not None:
        return obj, None
    return None, resolve_array(parsed, key, plural=plural)


def _is_error_status(response: ApiResponse) -> bool:
    status = response.status_code
    if response.is_unprocessable_entity:
        return False
    return response.transport_error is not None or (status is not None and status >= 400)


def _unwrapped(parsed: Any) -> tuple[dict[str, Any] | None, list[Any] | None]:
    """Sin namespace: el cuerpo entero es el objeto o el array.

    Un cuerpo que solo trae `errors` no es un recurso.
    """

    if isinstance(parsed, Mapping):
        if not parsed or set(parsed) <= {"errors"}:
            return None, None
        return {k: v for k, v in parsed.items() if k != "errors"}, None
    if isinstance(parsed, list):
        return None, parsed
    return None, None
