"""Core models for request body handling."""

import asyncio
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any, TypedDict
from urllib.parse import urlencode


class BodyType(StrEnum):
    """Body content type classification for canonicalization."""

    TEXT = "text"
    BINARY = "binary"
    STRUCTURED = "structured"
    FORM = "form"
    FILE_FORM = "file_form"


@dataclass(frozen=True, slots=True)
class ClassifiedBody:
    """A request body tagged with the canonicalization rule that applies to it."""

    kind: BodyType
    value: Any


class RequestOptions(TypedDict, total=False):
    """Options accepted by the dispatch layer and handed to the transport."""

    method: str
    headers: dict[str, str]
    body: Any
    params: Mapping[str, Any]
    timeout: float


class FileAttachment:
    """A named binary blob attached to a multipart form payload."""

    __slots__ = ("name", "content_type", "_content")

    def __init__(
        self,
        content: bytes | bytearray | Path,
        name: str | None = None,
        content_type: str = "application/octet-stream",
    ) -> None:
        if isinstance(content, Path):
            name = name or content.name
        elif isinstance(content, (bytes, bytearray)):
            content = bytes(content)
        else:
            raise TypeError(f"FileAttachment content must be bytes or Path, got {type(content).__name__}")
        self._content = content
        self.name = name or "blob"
        self.content_type = content_type

    def __repr__(self) -> str:
        return f"FileAttachment(name={self.name!r}, content_type={self.content_type!r}, size={self.size})"

    @property
    def size(self) -> int:
        """Byte length of the attachment."""
        if isinstance(self._content, Path):
            return self._content.stat().st_size
        return len(self._content)

    async def read(self) -> bytes:
        """Read the attachment bytes, off the event loop for files on disk."""
        if isinstance(self._content, Path):
            return await asyncio.to_thread(self._content.read_bytes)
        return self._content


class FormData:
    """Container for multipart/form-data entries: text fields and file attachments."""

    __slots__ = ("entries",)

    def __init__(self, entries: Iterable[tuple[str, str | FileAttachment]] | None = None) -> None:
        self.entries: list[tuple[str, str | FileAttachment]] = list(entries or [])

    def __bool__(self) -> bool:
        return bool(self.entries)

    def __iter__(self) -> Iterator[tuple[str, str | FileAttachment]]:
        return iter(self.entries)

    def __repr__(self) -> str:
        return f"FormData({self.entries!r})"

    def append(self, name: str, value: str | FileAttachment) -> "FormData":
        """Append an entry. Returns self for chaining."""
        self.entries.append((name, value))
        return self

    def get(self, name: str) -> str | FileAttachment | None:
        """Get the first entry value by field name."""
        return next((value for key, value in self.entries if key == name), None)

    def has(self, name: str) -> bool:
        return any(key == name for key, _ in self.entries)

    def fields(self) -> dict[str, str]:
        """Get text fields, first occurrence wins."""
        result: dict[str, str] = {}
        for key, value in self.entries:
            if isinstance(value, str):
                result.setdefault(key, value)
        return result

    def files(self) -> dict[str, FileAttachment]:
        """Get file attachments by field name, first occurrence wins."""
        result: dict[str, FileAttachment] = {}
        for key, value in self.entries:
            if isinstance(value, FileAttachment):
                result.setdefault(key, value)
        return result


class FormEncoded:
    """Ordered key/value pairs sent as application/x-www-form-urlencoded."""

    __slots__ = ("pairs",)

    def __init__(self, pairs: Mapping[str, str] | Iterable[tuple[str, str]] | None = None) -> None:
        items = pairs.items() if isinstance(pairs, Mapping) else (pairs or [])
        self.pairs: list[tuple[str, str]] = [(str(key), str(value)) for key, value in items]

    def __str__(self) -> str:
        return urlencode(self.pairs)

    def __repr__(self) -> str:
        return f"FormEncoded({self.pairs!r})"

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.pairs)
