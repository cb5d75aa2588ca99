"""Body normalizer: classify request bodies and render their canonical text."""

import dataclasses
from collections.abc import Awaitable, Callable
from typing import Any

import orjson
from pydantic import BaseModel

from content_hash.core.errors import BoundaryNotFound, UnsupportedBodyType
from content_hash.core.logger import LogIcon, logger
from content_hash.core.multipart import FILE_FIELD, build_multipart_body_for_file
from content_hash.models.core import BodyType, ClassifiedBody, FileAttachment, FormData, FormEncoded

Canonicalizer = Callable[[Any, str | None], Awaitable[str]]

# Form payloads have no enumerable JSON members, so their canonical text is an empty object.
EMPTY_FORM_TEXT = "{}"


def classify_body(body: Any) -> ClassifiedBody:
    """Decide which canonicalization rule applies to a body."""
    if isinstance(body, ClassifiedBody):
        return body

    match body:
        case str():
            return ClassifiedBody(BodyType.TEXT, body)
        case bytes() | bytearray() | memoryview():
            return ClassifiedBody(BodyType.BINARY, bytes(body))
        case FormData() if isinstance(body.get(FILE_FIELD), FileAttachment):
            return ClassifiedBody(BodyType.FILE_FORM, body)
        case FormData() | FormEncoded():
            return ClassifiedBody(BodyType.FORM, body)
        case BaseModel() | dict() | list() | tuple() | int() | float():
            return ClassifiedBody(BodyType.STRUCTURED, body)
        case _ if dataclasses.is_dataclass(body) and not isinstance(body, type):
            return ClassifiedBody(BodyType.STRUCTURED, body)
        case _:
            raise UnsupportedBodyType(body)


def decode_normalized(data: bytes) -> str:
    """Decode UTF-8 bytes, fold CRLF to LF and trim surrounding whitespace."""
    return data.decode("utf-8", errors="replace").replace("\r\n", "\n").strip()


def _orjson_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    raise TypeError(f"Type is not JSON serializable: {type(value).__name__}")


def serialize_structured(value: Any) -> str:
    """Serialize a structured body to compact JSON text."""
    try:
        text = orjson.dumps(value, default=_orjson_default).decode()
    except orjson.JSONEncodeError as ex:
        raise UnsupportedBodyType(value, str(ex)) from ex
    return text.replace("/\n", "\n")


async def _canonicalize_text(value: str, boundary: str | None) -> str:
    return value


async def _canonicalize_binary(value: bytes, boundary: str | None) -> str:
    return decode_normalized(value)


async def _canonicalize_structured(value: Any, boundary: str | None) -> str:
    return serialize_structured(value)


async def _canonicalize_form(value: FormData | FormEncoded, boundary: str | None) -> str:
    return EMPTY_FORM_TEXT


async def _canonicalize_file_form(value: FormData, boundary: str | None) -> str:
    if not boundary:
        raise BoundaryNotFound()
    multipart = await build_multipart_body_for_file(value.get(FILE_FIELD), boundary)
    return decode_normalized(multipart)


CANONICALIZERS: dict[BodyType, Canonicalizer] = {
    BodyType.TEXT: _canonicalize_text,
    BodyType.BINARY: _canonicalize_binary,
    BodyType.STRUCTURED: _canonicalize_structured,
    BodyType.FORM: _canonicalize_form,
    BodyType.FILE_FORM: _canonicalize_file_form,
}


async def canonicalize_body(body: Any, boundary: str | None = None) -> str:
    """Render the canonical text a body is hashed over."""
    classified = classify_body(body)
    text = await CANONICALIZERS[classified.kind](classified.value, boundary)
    logger.debug("Canonicalized body", icon=LogIcon.JSON, kind=classified.kind.value, length=len(text))
    return text


async def normalize_body(body: Any, boundary: str) -> Any:
    """
    Replace a file-carrying form payload with its normalized multipart text.

    Every other body is returned as is, so the bytes sent for a file upload are
    the bytes its digest covers.
    """
    if isinstance(body, FormData) and isinstance(body.get(FILE_FIELD), FileAttachment):
        return await _canonicalize_file_form(body, boundary)
    return body
