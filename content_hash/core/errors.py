"""Error taxonomy for body canonicalization and digesting."""


class ContentHashError(Exception):
    """Base exception for content hashing failures."""


class UnsupportedBodyType(ContentHashError, TypeError):
    """Raised when a request body has no canonical representation."""

    def __init__(self, body: object, reason: str | None = None) -> None:
        self.type_name = type(body).__name__
        message = f"Unsupported body type for content hashing: {self.type_name}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class BoundaryNotFound(ContentHashError, ValueError):
    """Raised when a multipart body has no resolvable boundary."""

    def __init__(self, content_type: str | None = None) -> None:
        self.content_type = content_type
        if content_type:
            message = f"No multipart boundary in Content-Type: {content_type!r}"
        else:
            message = "No multipart boundary supplied"
        super().__init__(message)
