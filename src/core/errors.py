"""Excepciones del Core.

Por qué tan pocas:
- Los fallos esperados (HTTP 4xx/5xx, cuerpo ilegible, red caída) se devuelven
  como datos dentro de `ApiModelResponse`, nunca como excepciones.
- Solo las violaciones de contrato (rutas ausentes, path vacío) se lanzan, y
  siempre al construir la llamada, nunca a mitad del dispatch.
"""

from __future__ import annotations


class RestBindError(Exception):
    """Base de todas las excepciones propias."""


class InvalidCallError(RestBindError, ValueError):
    """La llamada no se puede construir (p.ej. path vacío)."""


class RouteNotDefinedError(RestBindError, LookupError):
    """El modelo no declara la ruta que la operación necesita."""

    def __init__(self, model_name: str, action: str) -> None:
        super().__init__(f"{model_name} does not define a '{action}' route")
        self.model_name = model_name
        self.action = action


class RouteTemplateError(RestBindError, ValueError):
    """Un placeholder `:field:` no se pudo sustituir."""


class ParserNotConfiguredError(RestBindError, LookupError):
    """La `ApiConfig` no trae `parser`; se arma vía `core.services.context_factory`."""


class TransportError(RestBindError):
    """Fallo a nivel de red levantado por un transporte.

    El dispatcher lo captura y lo guarda en el envelope; nunca llega al caller.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
