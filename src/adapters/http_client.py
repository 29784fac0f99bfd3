"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, redirects y headers para el `fetch` de los scripts.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings
from core.domain.errors import FetchError
from core.domain.models import FetchResponse

logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los defaults del proyecto.

    Sin headers propios: sólo el `User-Agent` si está configurado.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {}
    if settings.user_agent:
        headers["User-Agent"] = settings.user_agent
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


class HttpxFetcher:
    """`Fetcher` basado en httpx: un GET por llamada.

    Un status no-2xx no es error aquí (igual que `fetch`); el llamador decide
    con `FetchResponse.raise_for_status()`.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def fetch(self, url: str) -> FetchResponse:
        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchError(url, str(exc) or exc.__class__.__name__) from exc

        logger.debug("GET %s -> HTTP %s (%d bytes)", url, response.status_code, len(response.content))
        return FetchResponse(
            url=str(response.url),
            status=response.status_code,
            body=response.text,
            headers=dict(response.headers),
        )
