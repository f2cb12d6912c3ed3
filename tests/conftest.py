"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from adapters.persistence import InMemoryStore
from core.context import ApiContext
from core.services.context_factory import build_test_context

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingHandler:
    """MockTransport handler that records requests and replays a response."""

    def __init__(self, response: httpx.Response | Handler) -> None:
        self._response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if callable(self._response):
            return self._response(request)
        return self._response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def make_context(store: InMemoryStore) -> Callable[..., tuple[ApiContext, RecordingHandler]]:
    """Build an isolated context that answers every request with `response`."""

    def _make(response: httpx.Response | Handler, **config_changes: Any) -> tuple[ApiContext, RecordingHandler]:
        handler = RecordingHandler(response)
        return build_test_context(handler, store=store, **config_changes), handler

    return _make
