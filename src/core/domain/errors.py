"""Errores del dominio."""

from __future__ import annotations


class FetchError(RuntimeError):
    """A fetch could not produce a response (DNS, connect, timeout, protocol)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"fetch {url} failed: {reason}")
        self.url = url
        self.reason = reason


class HttpStatusError(FetchError):
    """The server answered with a non-2xx status."""

    def __init__(self, url: str, status: int) -> None:
        super().__init__(url, f"HTTP {status}")
        self.status = status
