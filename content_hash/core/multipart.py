"""Byte-exact rebuild of single-file multipart/form-data payloads."""

from beartype import beartype

from content_hash.core.errors import BoundaryNotFound
from content_hash.core.logger import LogIcon, logger
from content_hash.models.core import FileAttachment

CRLF = "\r\n"
FILE_FIELD = "file"
PART_CONTENT_TYPE = "application/octet-stream"


def multipart_preamble(file_name: str, boundary: str) -> bytes:
    return (
        f"--{boundary}{CRLF}"
        f'Content-Disposition: form-data; name="{FILE_FIELD}"; filename="{file_name}"{CRLF}'
        f"Content-Type: {PART_CONTENT_TYPE}{CRLF}"
        f"{CRLF}"
    ).encode()


def multipart_postamble(boundary: str) -> bytes:
    return f"{CRLF}--{boundary}--{CRLF}".encode()


@beartype
async def build_multipart_body_for_file(attachment: FileAttachment, boundary: str) -> bytes:
    """
    Build the multipart/form-data bytes for a single ``file`` attachment.

    The part Content-Type is always ``application/octet-stream`` whatever the
    attachment declares, and no other form field is framed. The result ends
    right after the closing boundary marker and its CRLF.
    """
    if not boundary:
        raise BoundaryNotFound()

    data = await attachment.read()
    logger.debug(
        "Rebuilt multipart body",
        icon=LogIcon.UPLOAD,
        filename=attachment.name,
        size=len(data),
    )
    return multipart_preamble(attachment.name, boundary) + data + multipart_postamble(boundary)
