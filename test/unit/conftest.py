"""Test fixtures for content-sha256 unit tests."""

from dataclasses import dataclass, field
from typing import Any

import pytest

from content_hash.models.core import FileAttachment, FormData


# -----------------------------------------------------------------------------
# Mock transport
# -----------------------------------------------------------------------------


@dataclass
class MockResponse:
    """Mock response exposing the fields the dispatch layer relies on."""

    status_code: int = 200
    text: str = ""


@dataclass
class RecordingTransport:
    """Transport recording every call and answering with a canned response."""

    response: MockResponse = field(default_factory=MockResponse)
    calls: list[tuple[str, Any]] = field(default_factory=list)

    async def __call__(self, url: str, options: Any) -> MockResponse:
        self.calls.append((url, options))
        return self.response

    @property
    def last_options(self) -> Any:
        return self.calls[-1][1]


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def fixed_boundary_source():
    """Boundary source yielding predictable tokens."""
    counter = iter(range(1_000))

    def _source() -> str:
        return f"------------------------fixed{next(counter)}"

    return _source


@pytest.fixture
def attachment() -> FileAttachment:
    return FileAttachment(b"file content", name="file.txt", content_type="text/plain")


@pytest.fixture
def file_form(attachment: FileAttachment) -> FormData:
    return FormData().append("file", attachment).append("key", "bobs-bananas").append("mango", "fruit")
