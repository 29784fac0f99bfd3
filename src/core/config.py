"""Configuración del runtime.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP) y el script lean config de forma consistente.

Los defaults reproducen el comportamiento fijo del script de demo.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "toyrun"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "toyrun"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "toyrun"
    return Path.home() / ".config" / "toyrun"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="TOYRUN_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    fetch_url: str = Field(
        default="https://ipinfo.io/json",
        min_length=8,
        description="URL JSON que consulta el script de demo.",
    )
    delay_ms: int = Field(
        default=3000,
        ge=0,
        description="Retardo (ms) del callback diferido que imprime la suma.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str | None = Field(
        default=None,
        description="User-Agent opcional; sin valor se envía el de httpx.",
    )
    json_indent: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Espacios por nivel al re-serializar el JSON recibido.",
    )
    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Nivel de logging (DEBUG muestra la traza del event loop).",
    )
