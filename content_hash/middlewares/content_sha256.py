"""Middleware injecting the x-amz-content-sha256 header into outgoing requests."""

from content_hash.core.body import classify_body, normalize_body
from content_hash.core.boundary import (
    BoundarySource,
    find_header,
    generate_boundary,
    resolve_boundary,
    set_header,
    with_boundary,
)
from content_hash.core.digest import with_digest_header
from content_hash.core.logger import LogIcon, logger
from content_hash.middlewares.base import BaseMiddleware
from content_hash.models.core import BodyType, RequestOptions


class ContentSha256Middleware(BaseMiddleware):
    """Hashes the request body and adds the digest header before sending."""

    def __init__(
        self,
        boundary: str | None = None,
        boundary_source: BoundarySource | None = None,
        endpoints: frozenset[str] | list[str] | None = None,
    ) -> None:
        super().__init__(endpoints)
        self.boundary = boundary
        self.boundary_source = boundary_source or generate_boundary

    async def before(self, url: str, options: RequestOptions) -> RequestOptions:
        """Return options carrying the digest header and the body it was computed over."""
        body = options.get("body")
        if body is None:
            return options

        headers = dict(options.get("headers") or {})
        classified = classify_body(body)

        if classified.kind is BodyType.FILE_FORM:
            boundary = resolve_boundary(headers, self.boundary, self.boundary_source)
            body = await normalize_body(body, boundary)
            headers = set_header(headers, "Content-Type", with_boundary(find_header(headers, "content-type"), boundary))

        logger.debug(
            "Signing request body",
            icon=LogIcon.SECURITY,
            method=options.get("method", "GET"),
            url=url,
            kind=classified.kind.value,
        )
        return {**options, "headers": await with_digest_header(headers, body), "body": body}
