"""Digest engine and digest header helpers."""

import asyncio
import hashlib
from collections.abc import Mapping
from typing import Any

from beartype import beartype

from content_hash.core.body import canonicalize_body, classify_body
from content_hash.core.boundary import extract_boundary, find_header, is_multipart
from content_hash.core.logger import LogIcon, logger
from content_hash.core.settings import settings as st
from content_hash.models.core import BodyType

AWS_CONTENT_SHA256_HEADER = "x-amz-content-sha256"


@beartype
def sha256_hex(data: bytes | str) -> str:
    """Lowercase hex SHA-256 of bytes, or of the UTF-8 encoding of text."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest().replace("\n", "")


async def digest(data: bytes | str) -> str:
    """SHA-256 hex digest, hashed in a worker thread for large payloads."""
    payload = data.encode("utf-8") if isinstance(data, str) else data
    if len(payload) >= st.DIGEST_OFFLOAD_BYTES:
        return await asyncio.to_thread(sha256_hex, payload)
    return sha256_hex(payload)



async def digest_of(body: Any, boundary: str | None = None) -> str:
    """Digest of a request body's canonical text."""
    text = await canonicalize_body(body, boundary)
    value = await digest(text)
    logger.debug("Computed content digest", icon=LogIcon.SECURITY, digest=value)
    return value


async def with_digest_header(
    headers: Mapping[str, str] | None,
    body: Any,
    boundary: str | None = None,
) -> dict[str, str]:
    """
    Return a copy of ``headers`` carrying the body digest.

    Unrelated headers are kept; any existing digest header, whatever its
    casing, is replaced. Without an explicit boundary, a file form payload is
    framed with the boundary of a multipart Content-Type header.
    """
    classified = classify_body(body)
    if boundary is None and classified.kind is BodyType.FILE_FORM:
        content_type = find_header(headers or {}, "content-type")
        if is_multipart(content_type):
            boundary = extract_boundary(content_type)

    value = await digest_of(classified, boundary)
    merged = {key: val for key, val in (headers or {}).items() if key.lower() != AWS_CONTENT_SHA256_HEADER}
    merged[AWS_CONTENT_SHA256_HEADER] = value
    return merged
