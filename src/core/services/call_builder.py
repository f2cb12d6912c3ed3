"""Construcción pura de `Call`."""

from __future__ import annotations

from typing import Any, Mapping

from core.domain.models import Call, HttpMethod, RequestResponseNamespace
from core.errors import InvalidCallError


def build_call(
    method: HttpMethod | str,
    path: str,
    parameters: Mapping[str, Any] | None = None,
    namespace: RequestResponseNamespace | None = None,
) -> Call:
    if not path or not path.strip():
        raise InvalidCallError("A call requires a non-empty path")
    return Call(
        method=method if isinstance(method, HttpMethod) else HttpMethod(method.upper()),
        path=path,
        parameters=dict(parameters or {}),
        namespace=namespace or RequestResponseNamespace(),
    )


def get_call(
    path: str,
    parameters: Mapping[str, Any] | None = None,
    namespace: RequestResponseNamespace | None = None,
) -> Call:
    return build_call(HttpMethod.GET, path, parameters, namespace)


def post_call(
    path: str,
    parameters: Mapping[str, Any] | None = None,
    namespace: RequestResponseNamespace | None = None,
) -> Call:
    return build_call(HttpMethod.POST, path, parameters, namespace)


def put_call(
    path: str,
    parameters: Mapping[str, Any] | None = None,
    namespace: RequestResponseNamespace | None = None,
) -> Call:
    return build_call(HttpMethod.PUT, path, parameters, namespace)


def delete_call(
    path: str,
    parameters: Mapping[str, Any] | None = None,
    namespace: RequestResponseNamespace | None = None,
) -> Call:
    return build_call(HttpMethod.DELETE, path, parameters, namespace)
