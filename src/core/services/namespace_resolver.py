"""Localiza el payload de un recurso dentro del sobre de la respuesta.

Por qué singular y plural:
- Cada servidor anida las colecciones a su manera (`post` o `posts`);
  probar ambas claves evita configurar cada endpoint.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.domain.inflection import pluralize


def _candidates(key: str, plural: str | None) -> tuple[str, ...]:
    plural = plural or pluralize(key)
    if plural == key:
        return (key,)
    return (key, plural)


def resolve_object(tree: Any, key: str, *, plural: str | None = None) -> dict[str, Any] | None:
    """Subárbol objeto en `key` o en su plural; nunca una lista."""

    if not isinstance(tree, Mapping):
        return None
    for candidate in _candidates(key, plural):
        value = tree.get(candidate)
        if isinstance(value, Mapping):
            return dict(value)
    return None


def resolve_array(tree: Any, key: str, *, plural: str | None = None) -> list[Any] | None:
    """Simétrico a `resolve_object` pero solo acepta listas."""

    if not isinstance(tree, Mapping):
        return None
    for candidate in _candidates(key, plural):
        value = tree.get(candidate)
        if isinstance(value, list):
            return value
    return None


def fetch_path(tree: Any, path: str) -> Any | None:
    """Recorre `a.b.c` dentro de mappings anidados (root namespace)."""

    current = tree
    for part in (p for p in path.split(".") if p):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current
