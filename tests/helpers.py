"""Test-only models and response builders."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

import httpx

from core.domain.api_model import ApiModel
from core.domain.models import ApiRoutes, RequestResponseNamespace
from core.domain.transforms import (
    ApiIdTransform,
    ArrayTransform,
    DateTransform,
    JSONMapping,
    ModelTransform,
    StringTransform,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


def fixture_response(name: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=load_fixture(name).encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )


def json_response(data: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(data).encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )


def text_response(text: str, status_code: int = 500) -> httpx.Response:
    return httpx.Response(status_code, content=text.encode("utf-8"))


class Author(ApiModel):
    id: str = ""
    name: str = ""

    @classmethod
    def api_namespace(cls) -> str:
        return "author"

    @classmethod
    def api_routes(cls) -> ApiRoutes:
        return ApiRoutes(index="/authors.json", show="/authors/:id:.json")

    @classmethod
    def from_json_mapping(cls) -> JSONMapping:
        return {"id": ApiIdTransform(), "name": StringTransform()}


class Post(ApiModel):
    id: str = ""
    title: str = ""
    contents: str = ""
    created_at: datetime | None = None
    author: Author | None = None

    @classmethod
    def api_namespace(cls) -> str:
        return "post"

    @classmethod
    def api_routes(cls) -> ApiRoutes:
        return ApiRoutes(
            index="/v1/posts.json",
            show="/v1/posts/:id:.json",
        )

    @classmethod
    def from_json_mapping(cls) -> JSONMapping:
        return {
            "id": ApiIdTransform(),
            "title": StringTransform(),
            "contents": StringTransform(),
            "created_at": DateTransform(),
            "author": ModelTransform(Author),
        }


class Blog(ApiModel):
    id: str = ""
    name: str = ""
    posts: list[Post] = []

    @classmethod
    def api_namespace(cls) -> str:
        return "blog"

    @classmethod
    def from_json_mapping(cls) -> JSONMapping:
        return {"id": ApiIdTransform(), "name": StringTransform(), "posts": ArrayTransform(Post)}


class Person(ApiModel):
    """Asymmetric namespace and an irregular plural."""

    id: str = ""
    name: str = ""

    @classmethod
    def api_aware_namespace(cls) -> RequestResponseNamespace:
        return RequestResponseNamespace(request_key="person_params", response_key="person")

    @classmethod
    def api_routes(cls) -> ApiRoutes:
        return ApiRoutes(index="/people", create="/people", update="/people/:id:", destroy="/people/:id:")

    @classmethod
    def from_json_mapping(cls) -> JSONMapping:
        return {"id": ApiIdTransform(), "name": StringTransform()}


class Unrouted(ApiModel):
    id: str = ""

    @classmethod
    def api_namespace(cls) -> str:
        return "thing"

    @classmethod
    def from_json_mapping(cls) -> JSONMapping:
        return {"id": ApiIdTransform()}
