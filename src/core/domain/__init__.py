"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras (Pydantic v2 y dataclasses):
  llamadas, namespaces, rutas, envelopes y respuestas clasificadas.
- Nada de aquí hace I/O; el transporte y la persistencia son adaptadores.
"""
