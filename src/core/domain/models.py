"""Modelos del dominio.

Por qué dataclasses y no Pydantic aquí:
- `FetchResponse` transporta el body tal cual llega; no hay nada que validar
  hasta que el script decide decodificarlo.
- El documento JSON remoto no tiene forma fija: no se modela.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from core.domain.errors import HttpStatusError


class TimerKind(str, Enum):
    """Kinds of timers a script can schedule."""

    TIMEOUT = "timeout"
    INTERVAL = "interval"


@dataclass(frozen=True)
class FetchResponse:
    """Respuesta mínima tipo `Response` para scripts.

    El body se guarda como texto; `json()` lo decodifica bajo demanda.
    """

    url: str
    status: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def text(self) -> str:
        return self.body

    def json(self) -> Any:
        """Decode the body. Raises ``json.JSONDecodeError`` (a ``ValueError``)."""

        return json.loads(self.body)

    def raise_for_status(self) -> "FetchResponse":
        if not self.ok:
            raise HttpStatusError(self.url, self.status)
        return self
