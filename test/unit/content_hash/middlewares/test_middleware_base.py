"""Tests for the middleware chain."""

import pytest

from content_hash.middlewares.base import BaseMiddleware, MiddlewareHandler


class TaggingMiddleware(BaseMiddleware):
    """Records hook order and tags requests and responses."""

    def __init__(self, name: str, log: list[str], endpoints: list[str] | None = None) -> None:
        super().__init__(endpoints)
        self.name = name
        self.log = log

    async def before(self, url, options):
        self.log.append(f"before:{self.name}")
        return {**options, "headers": {**options.get("headers", {}), self.name: "1"}}

    async def after(self, response):
        self.log.append(f"after:{self.name}")
        return response


class ShortCircuitMiddleware(BaseMiddleware):
    def __init__(self, response) -> None:
        super().__init__()
        self.response = response

    async def before(self, url, options):
        return self.response


def test_subclass_must_implement_a_hook() -> None:
    with pytest.raises(TypeError, match="must implement at least one of before/after"):

        class Empty(BaseMiddleware):
            pass


def test_applies_to_prefixes() -> None:
    middleware = TaggingMiddleware("a", [], endpoints=["https://bucket.example.com/"])
    assert middleware.applies_to("https://bucket.example.com/key")
    assert not middleware.applies_to("https://other.example.com/key")
    assert TaggingMiddleware("b", []).applies_to("https://anything")


async def test_hooks_run_in_order(transport) -> None:
    log: list[str] = []
    handler = MiddlewareHandler(transport).register(TaggingMiddleware("a", log)).register(TaggingMiddleware("b", log))

    response = await handler.send("https://example.com", {"headers": {}})

    assert response is transport.response
    assert log == ["before:a", "before:b", "after:b", "after:a"]
    assert transport.last_options["headers"] == {"a": "1", "b": "1"}


async def test_non_matching_middleware_skipped(transport) -> None:
    log: list[str] = []
    handler = MiddlewareHandler(transport).register(TaggingMiddleware("a", log, endpoints=["https://other/"]))

    await handler.send("https://example.com", {"headers": {}})

    assert log == []
    assert transport.last_options == {"headers": {}}


async def test_short_circuit_skips_transport(transport) -> None:
    log: list[str] = []
    cached = type(transport.response)(status_code=304)
    handler = (
        MiddlewareHandler(transport)
        .register(TaggingMiddleware("a", log))
        .register(ShortCircuitMiddleware(cached))
    )

    response = await handler.send("https://example.com", {"headers": {}})

    assert response is cached
    assert transport.calls == []
    assert log == ["before:a", "after:a"]


def test_middlewares_property_is_a_copy(transport) -> None:
    handler = MiddlewareHandler(transport).register(TaggingMiddleware("a", []))
    handler.middlewares.clear()
    assert len(handler.middlewares) == 1
