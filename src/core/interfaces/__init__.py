"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- El runtime depende de `Fetcher`, no de httpx.
"""

from core.interfaces.fetcher import Fetcher

__all__ = ["Fetcher"]
