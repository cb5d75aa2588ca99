"""Base middleware architecture for outgoing requests."""

from collections.abc import Mapping

from content_hash.core.logger import LogIcon, logger
from content_hash.core.transport import ResponseLike, Transport
from content_hash.models.core import RequestOptions


class BaseMiddleware:
    """Base class for middlewares with before/after hooks around a transport."""

    endpoints: frozenset[str]

    def __init__(self, endpoints: frozenset[str] | list[str] | None = None) -> None:
        self.endpoints = frozenset(endpoints) if endpoints else frozenset()

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        # Check that at least one of before/after is implemented
        if cls.before is BaseMiddleware.before and cls.after is BaseMiddleware.after:
            raise TypeError(f"{cls.__name__} must implement at least one of before/after")

    def applies_to(self, url: str) -> bool:
        """Match the URL against endpoint prefixes. No endpoints means every URL."""
        return not self.endpoints or any(url.startswith(prefix) for prefix in self.endpoints)

    async def before(self, url: str, options: RequestOptions) -> RequestOptions | ResponseLike:
        """Called before sending. Return options to continue or a response to short-circuit."""
        return options

    async def after(self, response: ResponseLike) -> ResponseLike:
        """Called after the transport answered. Return the response to hand back."""
        return response


class MiddlewareHandler:
    """Runs registered middlewares around a transport."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport
        self._middlewares: list[BaseMiddleware] = []

    @property
    def middlewares(self) -> list[BaseMiddleware]:
        return list(self._middlewares)

    def register(self, middleware: BaseMiddleware) -> "MiddlewareHandler":
        """Register a middleware. Returns self for chaining."""
        self._middlewares.append(middleware)
        logger.debug(f"Registered middleware: {middleware.__class__.__name__}", icon=LogIcon.ADAPTER)
        return self

    async def send(self, url: str, options: RequestOptions) -> ResponseLike:
        """Run before hooks in order, the transport, then after hooks in reverse order."""
        active = [middleware for middleware in self._middlewares if middleware.applies_to(url)]

        for index, middleware in enumerate(active):
            result = await middleware.before(url, options)
            if not isinstance(result, Mapping):
                return await self._unwind(active[:index], result)
            options = result

        response = await self._transport(url, options)
        return await self._unwind(active, response)

    async def _unwind(self, middlewares: list[BaseMiddleware], response: ResponseLike) -> ResponseLike:
        for middleware in reversed(middlewares):
            response = await middleware.after(response)
        return response
