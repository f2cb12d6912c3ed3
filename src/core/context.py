"""Contexto de ejecución: config + transporte + persistencia + hooks.

Por qué un objeto explícito y no un singleton:
- Cada punto de entrada del pipeline recibe el contexto; los tests construyen
  uno aislado apuntando a un transporte falso sin tocar estado global.
- Las cadenas de hooks son tuplas inmutables capturadas al construirlo;
  registrar un hook devuelve un contexto nuevo.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable

from core.config import ApiConfig
from core.domain.models import ApiRequest, ApiResponse
from core.interfaces.persistence import PersistenceStore
from core.interfaces.transport import HttpTransport

BeforeRequestHook = Callable[[ApiRequest], None]
AfterRequestHook = Callable[[ApiRequest, ApiResponse], None]


@dataclass(frozen=True)
class ApiContext:
    config: ApiConfig
    transport: HttpTransport
    store: PersistenceStore
    before_hooks: tuple[BeforeRequestHook, ...] = ()
    after_hooks: tuple[AfterRequestHook, ...] = ()

    def with_before_hook(self, hook: BeforeRequestHook) -> "ApiContext":
        return replace(self, before_hooks=(*self.before_hooks, hook))

    def with_after_hook(self, hook: AfterRequestHook) -> "ApiContext":
        return replace(self, after_hooks=(*self.after_hooks, hook))

    def with_config(self, config: ApiConfig | None = None, **changes: Any) -> "ApiContext":
        """Sustituye la config entera o deriva una copia con `changes`."""

        base = config or self.config
        return replace(self, config=base.customize(**changes) if changes else base)
