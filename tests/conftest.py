"""Shared fixtures: a fake fetcher, captured output and isolated settings."""

from __future__ import annotations

import json
import time

import pytest

from core.config import AppSettings
from core.domain.models import FetchResponse


class FakeFetcher:
    """In-memory `Fetcher` that records calls and the output seen at call time."""

    def __init__(self, payload=None, *, body=None, status=200, error=None, output=None):
        self.body = body if body is not None else json.dumps(payload)
        self.status = status
        self.error = error
        self.output = output
        self.calls: list[str] = []
        self.output_at_call: list[list[str]] = []

    async def fetch(self, url: str) -> FetchResponse:
        self.calls.append(url)
        if self.output is not None:
            self.output_at_call.append(list(self.output))
        if self.error is not None:
            raise self.error
        return FetchResponse(url=url, status=self.status, body=self.body)


class Output:
    """Collects `ScriptRuntime.print` calls with their monotonic timestamps."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.times: list[float] = []

    def __call__(self, text: str) -> None:
        self.lines.append(text)
        self.times.append(time.monotonic())


@pytest.fixture
def output() -> Output:
    return Output()


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, delay_ms=30, fetch_url="https://example.test/json")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ("TOYRUN_FETCH_URL", "TOYRUN_DELAY_MS", "TOYRUN_LOG_LEVEL", "TOYRUN_USER_AGENT"):
        monkeypatch.delenv(key, raising=False)
