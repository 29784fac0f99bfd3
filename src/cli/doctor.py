"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
import json

import httpx
import typer
from rich.console import Console

from adapters.http_client import HttpxFetcher
from cli.ui_components import add_settings_rows, build_doctor_table
from core.config import AppSettings

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_fetch(
    settings: AppSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[bool, str]:
    """Fetch the configured URL once and check that the body is JSON."""

    try:
        response = await HttpxFetcher(settings, transport=transport).fetch(settings.fetch_url)
    except Exception as exc:
        return False, str(exc)
    if not response.ok:
        return False, f"HTTP {response.status}"
    try:
        response.json()
    except json.JSONDecodeError as exc:
        return False, f"HTTP {response.status}, body is not JSON ({exc.msg})"
    return True, f"HTTP {response.status}, JSON body"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show the effective configuration."""

    settings = AppSettings()

    table = build_doctor_table()
    add_settings_rows(table, settings)

    ok_http, detail_http = asyncio.run(_check_fetch(settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] `toyrun run` fails the same way; set TOYRUN_FETCH_URL or pass --url."
        )
