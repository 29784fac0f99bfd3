"""Contrato de fetch.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que el runtime use httpx en producción y un fake en tests sin
  acoplar el Core a una implementación concreta.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import FetchResponse


@runtime_checkable
class Fetcher(Protocol):
    """Contrato mínimo para el `fetch` de los scripts.

    Reglas de diseño:
    - `fetch` es asíncrono: el script se suspende cooperativamente durante el I/O.
    - Un error de transporte se propaga como `FetchError`; un status no-2xx no.
    """

    async def fetch(self, url: str) -> FetchResponse:
        """Hace un GET a `url` y devuelve la respuesta completa."""

        ...
