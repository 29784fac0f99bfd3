"""Modelos y errores del dominio.

Por qué:
- Aquí viven las estructuras de datos puras que comparten runtime y adaptadores.
- El dominio no conoce httpx, CLI, ni asyncio: solo conceptos del problema.
"""

from core.domain.errors import FetchError, HttpStatusError
from core.domain.models import FetchResponse, TimerKind

__all__ = [
    "FetchError",
    "FetchResponse",
    "HttpStatusError",
    "TimerKind",
]
