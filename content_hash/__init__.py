"""content-sha256 - x-amz-content-sha256 digests for outgoing request bodies."""

from content_hash.client import (
    AWS_CONTENT_SHA256_HEADER,
    ContentSha256Client,
    digest_of,
    dispatch_with_digest,
    normalize_body,
    with_digest_header,
)
from content_hash.core.errors import BoundaryNotFound, ContentHashError, UnsupportedBodyType
from content_hash.core.logger import LoggerConfig, setup_logging
from content_hash.models.core import FileAttachment, FormData, FormEncoded

__all__ = [
    "AWS_CONTENT_SHA256_HEADER",
    "BoundaryNotFound",
    "ContentHashError",
    "ContentSha256Client",
    "FileAttachment",
    "FormData",
    "FormEncoded",
    "LoggerConfig",
    "UnsupportedBodyType",
    "digest_of",
    "dispatch_with_digest",
    "normalize_body",
    "setup_logging",
    "with_digest_header",
]
