"""Contrato de la persistencia local."""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class PersistenceStore(Protocol):
    """Capacidad de mutar una instancia dentro de una transacción de escritura.

    `mutate` adquiere el scope, ejecuta `fn` y lo libera en todos los caminos
    de salida; los lectores concurrentes nunca ven una instancia a medias.
    """

    def mutate(self, instance: Any, fn: Callable[[], None]) -> None:
        ...
