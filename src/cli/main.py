"""CLI principal (Typer).

Por qué Typer:
- Declara opciones con type hints y genera `--help` sin boilerplate.
- Sub-apps (`doctor`) se montan con `add_typer`.

Los errores del script no se capturan aquí: Typer los reporta como excepción
no manejada y el proceso termina con código != 0.
"""

from __future__ import annotations

import typer

from adapters.http_client import HttpxFetcher
from cli.doctor import app as doctor_app
from core.config import AppSettings
from core.logging_setup import configure_logging
from core.runtime import ScriptRuntime
from core.services.hello_module import build_script

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="toyrun: runs the hello module on a tiny asyncio runtime.",
)
app.add_typer(doctor_app, name="doctor")


@app.command(name="run")
def run_hello(
    url: str | None = typer.Option(None, "--url", help="JSON endpoint to fetch."),
    delay_ms: int | None = typer.Option(
        None,
        "--delay-ms",
        min=0,
        help="Delay before the sum is printed (milliseconds).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show the event loop trace on stderr."),
) -> None:
    """Print the greeting, the fetched JSON document and, later, a sum."""

    overrides: dict[str, object] = {}
    if url is not None:
        overrides["fetch_url"] = url
    if delay_ms is not None:
        overrides["delay_ms"] = delay_ms
    settings = AppSettings(**overrides)

    configure_logging(settings.log_level, verbose=verbose)

    runtime = ScriptRuntime(fetcher=HttpxFetcher(settings))
    runtime.run(build_script(settings))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
