"""Persistencia local en memoria con transacciones de escritura.

Por qué un store propio:
- El pipeline solo necesita `mutate(instance, fn)`; esta implementación
  cubre CLI y tests. Otra base local puede cumplir el mismo Protocol.

Semántica:
- Un `RLock` serializa a los escritores (y permite anidar `write()`).
- Si `fn` lanza, la instancia vuelve a su estado previo y el scope se libera.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Callable, TypeVar

_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T")


def _snapshot(instance: Any) -> dict[str, Any]:
    return dict(vars(instance))


def _restore(instance: Any, snapshot: dict[str, Any]) -> None:
    state = vars(instance)
    state.clear()
    state.update(snapshot)


class InMemoryStore:
    def __init__(self, *, primary_key: str = "id") -> None:
        self._lock = threading.RLock()
        self._primary_key = primary_key
        self._objects: dict[type, dict[str, Any]] = {}

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._lock:
            yield

    def mutate(self, instance: Any, fn: Callable[[], None]) -> None:
        with self.write():
            snapshot = _snapshot(instance)
            try:
                fn()
            except Exception:
                _LOGGER.debug("Rolling back %s after failed write", type(instance).__name__)
                _restore(instance, snapshot)
                raise

    def _key(self, instance: Any) -> str:
        value = getattr(instance, self._primary_key, None)
        return "" if value is None else str(value)

    def add(self, instance: _T) -> _T:
        """Alta o reemplazo por clave primaria."""

        with self.write():
            self._objects.setdefault(type(instance), {})[self._key(instance)] = instance
        return instance

    def get(self, model_cls: type[_T], key: Any) -> _T | None:
        with self._lock:
            return self._objects.get(model_cls, {}).get(str(key))

    def all(self, model_cls: type[_T]) -> list[_T]:
        with self._lock:
            return list(self._objects.get(model_cls, {}).values())

    def delete(self, instance: Any) -> None:
        with self.write():
            self._objects.get(type(instance), {}).pop(self._key(instance), None)

    def delete_all(self) -> None:
        with self.write():
            self._objects.clear()
