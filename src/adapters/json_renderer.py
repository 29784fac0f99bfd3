"""Render JSON documents as indented text.

Por qué JSON indentado:
- Es la salida legible del documento remoto, con el mismo formato que
  `JSON.stringify(value, null, 2)`: separadores `,` / `: `, orden de claves
  preservado, sin escapar caracteres no ASCII.
"""

from __future__ import annotations

import json
from typing import Any


def render_json(value: Any, *, indent: int = 2) -> str:
    """Re-serializa un valor JSON ya decodificado."""

    return json.dumps(value, ensure_ascii=False, indent=indent)
