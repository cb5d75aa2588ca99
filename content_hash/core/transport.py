"""Transport protocol and the default httpx-backed transport."""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

import httpx

from content_hash.core.body import serialize_structured
from content_hash.core.boundary import find_header
from content_hash.core.logger import LogIcon, logger
from content_hash.core.settings import settings as st
from content_hash.models.core import FormData, FormEncoded, RequestOptions


@runtime_checkable
class ResponseLike(Protocol):
    """What the dispatch layer needs from a transport response."""

    status_code: int

    @property
    def text(self) -> str: ...


class Transport(Protocol):
    """Sends a request and returns a response-like object."""

    async def __call__(self, url: str, options: RequestOptions) -> ResponseLike: ...


def _with_content_type(headers: Mapping[str, str], value: str) -> dict[str, str]:
    merged = dict(headers)
    if find_header(merged, "content-type") is None:
        merged["Content-Type"] = value
    return merged


async def build_request_kwargs(options: RequestOptions) -> dict[str, Any]:
    """Map dispatch options onto ``httpx.AsyncClient.request`` keyword arguments."""
    headers = dict(options.get("headers") or {})
    kwargs: dict[str, Any] = {}
    if "params" in options:
        kwargs["params"] = options["params"]
    if "timeout" in options:
        kwargs["timeout"] = options["timeout"]

    match options.get("body"):
        case None:
            pass
        case str() | bytes() as content:
            kwargs["content"] = content
        case bytearray() | memoryview() as content:
            kwargs["content"] = bytes(content)
        case FormEncoded() as form:
            kwargs["content"] = str(form)
            headers = _with_content_type(headers, "application/x-www-form-urlencoded")
        case FormData() as form:
            kwargs["data"] = form.fields()
            if files := form.files():
                kwargs["files"] = {
                    name: (attachment.name, await attachment.read(), attachment.content_type)
                    for name, attachment in files.items()
                }
        case body:
            kwargs["content"] = serialize_structured(body).encode()
            headers = _with_content_type(headers, "application/json")

    kwargs["headers"] = headers
    return kwargs


class HttpxTransport:
    """Transport sending requests through an ``httpx.AsyncClient``."""

    def __init__(self, client: httpx.AsyncClient | None = None, timeout: float | None = None) -> None:
        self._owns_client = client is None
        self._client = client
        self._timeout = timeout if timeout is not None else st.REQUEST_TIMEOUT

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self._timeout))
        return self._client

    async def __call__(self, url: str, options: RequestOptions) -> httpx.Response:
        method = (options.get("method") or "GET").upper()
        kwargs = await build_request_kwargs(options)
        logger.debug("Sending request", icon=LogIcon.NETWORK, method=method, url=url)
        return await self._get_client().request(method, url, **kwargs)

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
