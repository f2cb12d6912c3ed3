"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos
  (transporte HTTP, parser, persistencia) y los modelos enlazables.
- Permite invertir dependencias: el Core depende de abstracciones.
"""
