"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- La salida del script (stdout exacto) nunca pasa por aquí: sólo `doctor`.
"""

from __future__ import annotations

from rich.table import Table

from core.config import AppSettings, get_user_env_file


def build_doctor_table() -> Table:
    table = Table(title="toyrun Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table


def add_settings_rows(table: Table, settings: AppSettings) -> None:
    """Filas de configuración efectiva (env vars + .env)."""

    table.add_row("Fetch URL", "OK", settings.fetch_url)
    table.add_row("Delay", "OK", f"{settings.delay_ms} ms")
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g} s")
    if settings.user_agent:
        table.add_row("User-Agent", "OK", settings.user_agent)
    else:
        table.add_row("User-Agent", "DEFAULT", "httpx default")
    env_file = get_user_env_file()
    table.add_row("User .env", "OK" if env_file.exists() else "OPTIONAL", str(env_file))
