"""In-memory store: scoped writes and rollback."""

from __future__ import annotations

import threading

import pytest

from adapters.persistence import InMemoryStore
from tests.helpers import Author, Post


def test_mutate_applies_changes() -> None:
    store = InMemoryStore()
    post = store.add(Post(id="1", title="Old"))
    store.mutate(post, lambda: post.apply_wire_update({"title": "New"}))
    assert store.get(Post, "1") is post
    assert post.title == "New"


def test_failed_mutation_is_rolled_back_and_lock_released() -> None:
    store = InMemoryStore()
    post = Post(id="1", title="Old", contents="Body")

    def broken() -> None:
        post.title = "Half"
        raise RuntimeError("disk full")

    with pytest.raises(RuntimeError):
        store.mutate(post, broken)

    assert post.title == "Old"
    assert post.contents == "Body"

    acquired: list[bool] = []

    def try_write() -> None:
        ok = store._lock.acquire(timeout=1)
        acquired.append(ok)
        if ok:
            store._lock.release()

    worker = threading.Thread(target=try_write)
    worker.start()
    worker.join()
    assert acquired == [True]


def test_nested_write_scopes_are_allowed() -> None:
    store = InMemoryStore()
    post = Post(id="1")
    with store.write():
        store.mutate(post, lambda: post.apply_wire_update({"title": "Nested"}))
    assert post.title == "Nested"


def test_add_get_all_delete() -> None:
    store = InMemoryStore()
    store.add(Post(id="1"))
    store.add(Post(id="2"))
    store.add(Author(id="1"))
    assert {p.id for p in store.all(Post)} == {"1", "2"}
    assert store.get(Post, 2) is not None
    store.delete(Post(id="1"))
    assert store.get(Post, "1") is None
    store.delete_all()
    assert store.all(Author) == []
