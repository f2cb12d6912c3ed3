"""Contrato del transporte HTTP.

Por qué Protocol:
- El Core nunca importa httpx; cualquier objeto con `execute` sirve
  (httpx en producción, un stub en tests).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from core.domain.models import ApiRequest, ApiResponse


@runtime_checkable
class HttpTransport(Protocol):
    """Un único round-trip HTTP.

    Reglas de diseño:
    - Es asíncrono porque hace I/O.
    - Los fallos de red se devuelven en `ApiResponse.transport_error` o se
      lanzan como `core.errors.TransportError`; nada más.
    """

    async def execute(self, request: "ApiRequest") -> "ApiResponse":
        ...
