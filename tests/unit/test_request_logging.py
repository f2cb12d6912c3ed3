"""Request logging hooks."""

from __future__ import annotations

import logging

import pytest

from core.services.call_builder import get_call
from core.services.dispatcher import RequestDispatcher
from tests.helpers import json_response


@pytest.mark.asyncio
async def test_logs_start_and_finish_when_enabled(make_context, caplog) -> None:
    context, _ = make_context(json_response({}, status_code=204), request_logging=True)
    with caplog.at_level(logging.INFO, logger="core.services.request_logging"):
        response = await RequestDispatcher(context).execute(get_call("/posts.json"))

    messages = [record.getMessage() for record in caplog.records]
    assert messages[0].startswith("GET /posts.json with headers:")
    assert messages[1].startswith("GET /posts.json finished in ")
    assert messages[1].endswith("seconds with status 204")
    assert "request_started_at" in response.request.user_info


@pytest.mark.asyncio
async def test_silent_when_disabled(make_context, caplog) -> None:
    context, _ = make_context(json_response({}))
    with caplog.at_level(logging.INFO, logger="core.services.request_logging"):
        response = await RequestDispatcher(context).execute(get_call("/posts.json"))
    assert caplog.records == []
    assert "request_started_at" not in response.request.user_info
