"""The hello module: greeting, one JSON fetch, one delayed sum.

Observable output, in order:

1. ``Hello from JS Module!``
2. the fetched document, re-serialized with ``settings.json_indent`` spaces
3. after ``settings.delay_ms``: ``Let us add!`` and ``10 + 20 = 30``

The delayed callback is registered before the fetch is awaited, so it fires
even when the fetch fails; the failure itself propagates to the caller once the
runtime has drained its timers.
"""

from __future__ import annotations

from adapters.json_renderer import render_json
from core.config import AppSettings
from core.math_ops import add
from core.runtime import ScriptRuntime

GREETING = "Hello from JS Module!"
ADD_BANNER = "Let us add!"
LEFT_OPERAND = 10
RIGHT_OPERAND = 20


def sum_line() -> str:
    return f"{LEFT_OPERAND} + {RIGHT_OPERAND} = " + str(add(LEFT_OPERAND, RIGHT_OPERAND))


async def hello_module(runtime: ScriptRuntime, settings: AppSettings) -> None:
    runtime.print(GREETING)

    def print_sum() -> None:
        runtime.print(ADD_BANNER)
        runtime.print(sum_line())

    runtime.set_timeout(print_sum, settings.delay_ms)

    response = await runtime.fetch(settings.fetch_url)
    response.raise_for_status()
    content = response.json()
    runtime.print(render_json(content, indent=settings.json_indent))


def build_script(settings: AppSettings):
    """Bind `settings` so the result can be passed to `ScriptRuntime.execute`."""

    async def script(runtime: ScriptRuntime) -> None:
        await hello_module(runtime, settings)

    return script
