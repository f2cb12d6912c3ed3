"""Parser JSON de cuerpos de respuesta.

Por qué no lanza:
- Un 500 con HTML o texto plano es un caso esperado; el clasificador lo trata
  como "sin payload estructurado", no como fallo duro.
"""

from __future__ import annotations

import json
from typing import Any


class JsonResponseParser:
    def parse(self, body: str | bytes) -> Any | None:
        if isinstance(body, bytes):
            try:
                body = body.decode("utf-8")
            except UnicodeDecodeError:
                return None
        if not body or not body.strip():
            return None
        try:
            return json.loads(body)
        except json.JSONDecodeError:
            return None
