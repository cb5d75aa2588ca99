"""content-sha256 - request bodies signed with x-amz-content-sha256."""

from typing import Any

from content_hash.core.body import normalize_body
from content_hash.core.boundary import BoundarySource
from content_hash.core.digest import AWS_CONTENT_SHA256_HEADER, digest_of, with_digest_header
from content_hash.core.logger import LogIcon, logger
from content_hash.core.transport import HttpxTransport, ResponseLike, Transport
from content_hash.middlewares.base import BaseMiddleware, MiddlewareHandler
from content_hash.middlewares.content_sha256 import ContentSha256Middleware
from content_hash.models.core import RequestOptions

__all__ = [
    "AWS_CONTENT_SHA256_HEADER",
    "ContentSha256Client",
    "digest_of",
    "dispatch_with_digest",
    "normalize_body",
    "with_digest_header",
]


async def dispatch_with_digest(
    url: str,
    options: RequestOptions | None = None,
    boundary: str | None = None,
    *,
    transport: Transport | None = None,
    boundary_source: BoundarySource | None = None,
) -> ResponseLike:
    """
    Send a request with its body digest in the ``x-amz-content-sha256`` header.

    A request without a body reaches the transport with its options object
    untouched. A file form body is replaced by the multipart text its digest
    was computed over. Transport errors propagate unchanged.
    """
    options = options if options is not None else {}
    middleware = ContentSha256Middleware(boundary=boundary, boundary_source=boundary_source)

    if transport is not None:
        return await MiddlewareHandler(transport).register(middleware).send(url, options)

    async with HttpxTransport() as default_transport:
        return await MiddlewareHandler(default_transport).register(middleware).send(url, options)


class ContentSha256Client:
    """Long-lived client signing every request body it sends."""

    def __init__(
        self,
        transport: Transport | None = None,
        boundary_source: BoundarySource | None = None,
        middlewares: list[BaseMiddleware] | None = None,
    ) -> None:
        self._owned_transport = HttpxTransport() if transport is None else None
        self._transport = transport or self._owned_transport
        self._boundary_source = boundary_source
        self._middlewares = list(middlewares or [])

    def _handler_for(self, boundary: str | None) -> MiddlewareHandler:
        handler = MiddlewareHandler(self._transport)
        for middleware in self._middlewares:
            handler.register(middleware)
        return handler.register(ContentSha256Middleware(boundary=boundary, boundary_source=self._boundary_source))

    async def request(self, method: str, url: str, boundary: str | None = None, **options: Any) -> ResponseLike:
        """Send a request. ``options`` are the transport options (headers, body, params, timeout)."""
        request_options: RequestOptions = {"method": method.upper(), **options}  # type: ignore[typeddict-item]
        return await self._handler_for(boundary).send(url, request_options)

    async def get(self, url: str, **options: Any) -> ResponseLike:
        return await self.request("GET", url, **options)

    async def post(self, url: str, **options: Any) -> ResponseLike:
        return await self.request("POST", url, **options)

    async def put(self, url: str, **options: Any) -> ResponseLike:
        return await self.request("PUT", url, **options)

    async def patch(self, url: str, **options: Any) -> ResponseLike:
        return await self.request("PATCH", url, **options)

    async def delete(self, url: str, **options: Any) -> ResponseLike:
        return await self.request("DELETE", url, **options)

    async def aclose(self) -> None:
        if self._owned_transport is not None:
            await self._owned_transport.aclose()
            logger.debug("Closed owned transport", icon=LogIcon.NETWORK)

    async def __aenter__(self) -> "ContentSha256Client":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
