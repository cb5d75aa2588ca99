"""Multipart boundary tokens: generation, extraction and resolution."""

import secrets
import string
from collections.abc import Callable, Mapping

from beartype import beartype

from content_hash.core.errors import BoundaryNotFound
from content_hash.core.settings import settings as st

BoundarySource = Callable[[], str]

BOUNDARY_ALPHABET = string.digits + string.ascii_lowercase


def make_boundary_source(prefix: str | None = None, length: int | None = None) -> BoundarySource:
    """Build a boundary source emitting a fixed prefix plus random base-36 characters."""
    prefix = st.BOUNDARY_PREFIX if prefix is None else prefix
    length = st.BOUNDARY_RANDOM_LENGTH if length is None else length
    if length < 1:
        raise ValueError("Boundary random length must be positive")

    def _source() -> str:
        return prefix + "".join(secrets.choice(BOUNDARY_ALPHABET) for _ in range(length))

    return _source


def generate_boundary() -> str:
    """Return a fresh boundary using the configured prefix and length."""
    return make_boundary_source()()


def find_header(headers: Mapping[str, str], name: str) -> str | None:
    """Case-insensitive header lookup."""
    lowered = name.lower()
    return next((value for key, value in headers.items() if key.lower() == lowered), None)


def is_multipart(content_type: str | None) -> bool:
    return bool(content_type) and content_type.split(";", 1)[0].strip().lower().startswith("multipart/")


@beartype
def extract_boundary(content_type: str) -> str:
    """Extract the boundary parameter from a multipart Content-Type value."""
    for param in content_type.split(";")[1:]:
        key, sep, value = param.strip().partition("=")
        if sep and key.strip().lower() == "boundary":
            value = value.strip()
            if len(value) >= 2 and value[0] == value[-1] == '"':
                value = value[1:-1]
            if value:
                return value
    raise BoundaryNotFound(content_type)


def with_boundary(content_type: str | None, boundary: str) -> str:
    """
    Content-Type declaring ``boundary``.

    A multipart value keeps its subtype and other parameters with the boundary
    parameter replaced or appended; anything else becomes ``multipart/form-data``.
    """
    if not is_multipart(content_type):
        return f"multipart/form-data; boundary={boundary}"
    media_type, *params = (part.strip() for part in content_type.split(";"))
    kept = [param for param in params if param and param.partition("=")[0].strip().lower() != "boundary"]
    return "; ".join([media_type, *kept, f"boundary={boundary}"])


def set_header(headers: Mapping[str, str], name: str, value: str) -> dict[str, str]:
    """Copy of ``headers`` with ``name`` set, replacing any casing of it and keeping an existing key's spelling."""
    lowered = name.lower()
    key = next((key for key in headers if key.lower() == lowered), name)
    merged = {k: v for k, v in headers.items() if k.lower() != lowered}
    merged[key] = value
    return merged


def resolve_boundary(
    headers: Mapping[str, str] | None,
    boundary: str | None = None,
    source: BoundarySource | None = None,
) -> str:
    """
    Pick the boundary for a multipart rebuild.

    Order: explicit boundary, then the boundary parameter of a multipart
    Content-Type header, then the boundary source. A multipart Content-Type
    without a boundary parameter is an error rather than a cue to generate one.
    """
    if boundary:
        return boundary

    content_type = find_header(headers or {}, "content-type")
    if is_multipart(content_type):
        return extract_boundary(content_type)

    if source is None:
        raise BoundaryNotFound(content_type)
    return source()
