"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el resolver depende de abstracciones, no del
  framework web ni del cliente HTTP.
"""
