"""Client-side filter for document uploads.

Mirrors the file picker's accept list so that uploads coming from other
paths (drag and drop, scripts) are held to the same rule. The remote
service remains the real enforcement point.
"""

from pathlib import Path

from pydantic import BaseModel, Field

from insight.config import MAX_UPLOAD_SIZE

ACCEPTED_EXTENSIONS = (".pdf", ".txt")
CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".txt": "text/plain",
}


class UploadRejected(ValueError):
    """Raised when a file does not pass the client-side filter."""

    pass


class UploadFile(BaseModel):
    """A file picked by the user, ready to be sent as multipart data.

    Attributes:
        filename: Name reported to the service.
        content: Raw file bytes.
        content_type: MIME type sent with the part.
    """

    filename: str
    content: bytes
    content_type: str = Field(default="application/octet-stream")

    @classmethod
    def from_path(cls, path: Path) -> "UploadFile":
        """Read a file from disk and guess its content type from the suffix."""
        suffix = path.suffix.lower()
        return cls(
            filename=path.name,
            content=path.read_bytes(),
            content_type=CONTENT_TYPES.get(suffix, "application/octet-stream"),
        )

    @property
    def extension(self) -> str:
        return Path(self.filename).suffix.lower()

    def as_multipart(self) -> tuple[str, bytes, str]:
        return (self.filename, self.content, self.content_type)


def accept_attribute() -> str:
    """Return the value for an HTML file input's ``accept`` attribute."""
    return ",".join(ACCEPTED_EXTENSIONS)


def validate_upload(file: UploadFile | None, max_bytes: int = MAX_UPLOAD_SIZE) -> UploadFile:
    """Validate a picked file before it is sent.

    Args:
        file: The picked file, or None when the picker was cleared.
        max_bytes: Largest accepted file size.

    Returns:
        The validated file.

    Raises:
        UploadRejected: If no file was picked, the extension is not
            accepted, the file is empty, or it exceeds ``max_bytes``.
    """
    if file is None or not file.filename:
        raise UploadRejected("No file selected")

    if file.extension not in ACCEPTED_EXTENSIONS:
        raise UploadRejected("Only PDF and TXT files are accepted")

    if not file.content:
        raise UploadRejected(f"{file.filename} is empty")

    if len(file.content) > max_bytes:
        size_mb = len(file.content) / (1024 * 1024)
        limit_mb = max_bytes / (1024 * 1024)
        raise UploadRejected(
            f"File size ({size_mb:.1f}MB) exceeds maximum allowed ({limit_mb:.0f}MB)"
        )

    return file
