"""Contrato del parser de cuerpos de respuesta."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ResponseParser(Protocol):
    """Decodifica el cuerpo crudo a un árbol genérico (dict/list/escalar).

    Regla: un cuerpo vacío o ilegible devuelve `None`; nunca lanza.
    """

    def parse(self, body: str) -> Any | None:
        ...
