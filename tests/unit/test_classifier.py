"""Response classification and payload extraction."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from adapters.json_parser import JsonResponseParser
from core.config import ApiConfig
from core.domain.models import ApiRequest, ApiResponse, HttpMethod, RequestResponseNamespace
from core.domain.response import Classification
from core.services.classifier import classify_response
from tests.helpers import Person, Post, load_fixture

POST_NS = RequestResponseNamespace.symmetric("post")


def _response(
    status_code: int | None,
    body: Any = None,
    *,
    raw: str | None = None,
    transport_error: BaseException | None = None,
) -> ApiResponse:
    config = ApiConfig(host="http://example.test")
    request = ApiRequest(config=config, method=HttpMethod.GET, path="/x", url="http://example.test/x")
    text = raw if raw is not None else (json.dumps(body) if body is not None else None)
    return ApiResponse(
        request=request,
        status_code=status_code,
        body=text,
        transport_error=transport_error,
        parsed_body=JsonResponseParser().parse(text) if text else None,
    )


def test_success_with_object() -> None:
    result = classify_response(_response(200, json.loads(load_fixture("post.json"))), POST_NS, Post)
    assert result.classification is Classification.SUCCESSFUL
    assert result.is_successful
    assert result.object is not None
    assert result.object.title == "First"
    assert result.extracted_array is None
    assert not result.has_errors


def test_success_with_array_under_plural_key() -> None:
    result = classify_response(_response(200, json.loads(load_fixture("posts.json"))), POST_NS, Post)
    assert result.is_successful
    assert result.extracted_object is None
    assert [post.id for post in result.array or []] == ["1", "2"]
    assert result.array[0].author is not None  # type: ignore[index]


def test_object_takes_precedence_over_array() -> None:
    body = {"post": {"id": 1}, "posts": [{"id": 2}]}
    result = classify_response(_response(200, body), POST_NS, Post)
    assert result.extracted_object == {"id": 1}
    assert result.extracted_array is None
    assert result.array is None


def test_array_materialization_skips_non_mappings() -> None:
    result = classify_response(_response(200, {"posts": [{"id": 1}, 7, "x", {"id": 2}]}), POST_NS, Post)
    assert result.extracted_array == [{"id": 1}, 7, "x", {"id": 2}]
    assert [post.id for post in result.array or []] == ["1", "2"]


def test_server_error_surfaces_body_errors_verbatim() -> None:
    result = classify_response(_response(500, json.loads(load_fixture("500_error.json"))), POST_NS, Post)
    assert result.classification is Classification.SERVER_FAILURE
    assert result.has_server_error
    assert not result.has_validation_errors
    assert result.has_errors
    assert result.server_errors == [
        {"status": "500", "code": "ServerError", "detail": "A fatal error has occurred."}
    ]
    assert result.server_error_messages == [
        "Status: 500",
        "Code: ServerError",
        "Detail: A fatal error has occurred.",
    ]


def test_server_error_with_html_body_uses_generic_message() -> None:
    result = classify_response(_response(500, raw="<body>Something went wrong!</body>"), POST_NS, Post)
    assert result.has_server_error
    assert result.is_malformed
    assert result.server_error_messages == ["Base: An unexpected server error occurred"]
    assert result.array is None


def test_transport_failure_is_a_server_failure() -> None:
    error = httpx.ConnectError("connection refused")
    result = classify_response(_response(None, raw="Something went wrong!", transport_error=error), POST_NS, Post)
    assert result.classification is Classification.SERVER_FAILURE
    assert result.is_transport_failure
    assert result.server_errors == [{"base": "An unexpected server error occurred"}]
    assert result.server_error_messages == ["Base: An unexpected server error occurred"]
    assert not result.has_validation_errors


def test_validation_errors_on_422() -> None:
    result = classify_response(_response(422, json.loads(load_fixture("post_with_error.json"))), POST_NS, Post)
    assert result.classification is Classification.VALIDATION_FAILURE
    assert result.has_validation_errors
    assert not result.has_server_error
    assert result.validation_error_messages == ["Title: must not be blank!", "Contents: must not be blank!"]
    assert [e.as_dict() for e in result.validation_errors or []] == [
        {"title": "must not be blank!"},
        {"contents": "must not be blank!"},
    ]
    assert result.object is None


def test_422_with_echoed_object_has_both_object_and_errors() -> None:
    body = json.loads(load_fixture("post_with_attributes_and_error.json"))
    result = classify_response(_response(422, body), POST_NS, Post)
    assert result.has_validation_errors
    assert result.object is not None
    assert result.object.title == "My Test"
    assert not result.is_successful


def test_legacy_field_errors_are_validation_errors_on_any_status() -> None:
    body = json.loads(load_fixture("post_with_legacy_errors.json"))
    result = classify_response(_response(400, body), POST_NS, Post)
    assert result.classification is Classification.VALIDATION_FAILURE
    assert result.validation_error_messages == [
        "Base: Post could not be saved",
        "Title: can't be blank",
        "Title: is too short",
    ]
    assert result.field_errors == {"base": ["Post could not be saved"], "title": ["can't be blank", "is too short"]}


def test_plain_error_messages_are_server_errors() -> None:
    result = classify_response(_response(200, {"errors": ["Maintenance mode"]}), POST_NS, Post)
    assert result.classification is Classification.SERVER_FAILURE
    assert result.server_error_messages == ["Base: Maintenance mode"]


@pytest.mark.parametrize(
    ("status_code", "expected"),
    [
        (200, Classification.SUCCESSFUL),
        (204, Classification.SUCCESSFUL),
        (401, Classification.UNAUTHORIZED),
        (404, Classification.CLIENT_ERROR),
        (503, Classification.SERVER_FAILURE),
        (302, Classification.NONE),
        (None, Classification.NONE),
    ],
)
def test_status_table(status_code: int | None, expected: Classification) -> None:
    assert classify_response(_response(status_code), POST_NS, Post).classification is expected


def test_unauthorized_and_client_error_predicates() -> None:
    assert classify_response(_response(401), POST_NS, Post).is_unauthorized
    client = classify_response(_response(404, {"errors": [{"id": "not found"}]}), POST_NS, Post)
    assert client.is_client_error
    assert not client.has_errors
    assert client.error_payload is not None


def test_no_namespace_uses_whole_body() -> None:
    no_ns = RequestResponseNamespace()
    obj = classify_response(_response(200, {"id": 9, "title": "Bare"}), no_ns, Post)
    assert obj.object is not None
    assert obj.object.id == "9"

    arr = classify_response(_response(200, [{"id": 1}, {"id": 2}]), no_ns, Post)
    assert [p.id for p in arr.array or []] == ["1", "2"]

    errors_only = classify_response(_response(422, {"errors": [{"title": "x"}]}), no_ns, Post)
    assert errors_only.object is None


def test_unparseable_success_body_is_malformed_not_fatal() -> None:
    result = classify_response(_response(200, raw="not json"), POST_NS, Post)
    assert result.is_malformed
    assert result.is_successful
    assert result.object is None
    assert result.array is None


def test_irregular_plural_namespace() -> None:
    ns = Person.api_aware_namespace()
    result = classify_response(_response(200, {"people": [{"id": 1, "name": "Ann"}]}), ns, Person)
    assert [p.name for p in result.array or []] == ["Ann"]


@pytest.mark.parametrize("status_code", [200, 422])
def test_field_errors_inside_the_resource_object(status_code: int) -> None:
    body = json.loads(load_fixture("post_with_nested_errors.json"))
    result = classify_response(_response(status_code, body), POST_NS, Post)
    assert result.classification is Classification.VALIDATION_FAILURE
    assert result.has_errors
    assert not result.is_successful
    assert result.validation_error_messages == ["Title: can't be blank"]
    assert result.field_errors == {"title": ["can't be blank"]}
    assert result.object is not None
    assert result.object.id == "3"


def test_plain_messages_inside_the_resource_object() -> None:
    result = classify_response(_response(200, {"post": {"id": "3", "errors": ["Post is locked"]}}), POST_NS, Post)
    assert result.classification is Classification.SERVER_FAILURE
    assert result.server_error_messages == ["Base: Post is locked"]
    assert result.field_errors == {"base": ["Post is locked"]}


def test_top_level_errors_win_over_nested_ones() -> None:
    body = {"post": {"id": "3", "errors": ["nested"]}, "errors": [{"title": "top"}]}
    result = classify_response(_response(422, body), POST_NS, Post)
    assert result.validation_error_messages == ["Title: top"]
    assert not result.has_server_error


def test_no_namespace_error_body_is_not_a_resource() -> None:
    no_ns = RequestResponseNamespace()
    failed = classify_response(_response(500, {"message": "boom"}), no_ns, Post)
    assert failed.has_server_error
    assert failed.object is None
    assert failed.extracted_object is None

    missing = classify_response(_response(404, [{"id": 1}]), no_ns, Post)
    assert missing.array is None

    echoed = classify_response(_response(422, {"id": 4, "errors": [{"title": "x"}]}), no_ns, Post)
    assert echoed.object is not None
    assert echoed.object.id == "4"
