import mimetypes
from pathlib import Path

from outpaint.imaging.exceptions import DecodeError, InputTooLargeError
from outpaint.imaging.models import SourceImage

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class FileLoader:
    """Reads a user-selected image file into a SourceImage, enforcing the size limit."""

    def __init__(self, max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES) -> None:
        self._max_upload_bytes = max_upload_bytes

    def load(self, path: Path) -> SourceImage:
        """Read the file at ``path``.

        The size is checked from the filesystem before the bytes are read, so an
        oversized file never reaches memory or the network.

        Raises:
            InputTooLargeError: if the file is larger than the configured limit.
            DecodeError: if the file does not exist or cannot be read.
        """
        try:
            size = path.stat().st_size
        except OSError as exc:
            raise DecodeError() from exc
        self.check_size(size)
        try:
            raw_bytes = path.read_bytes()
        except OSError as exc:
            raise DecodeError() from exc
        return self.from_bytes(raw_bytes, filename=path.name)

    def from_bytes(
        self,
        raw_bytes: bytes,
        *,
        filename: str = "image",
        mime_type: str | None = None,
    ) -> SourceImage:
        """Wrap already-read bytes (e.g. an HTTP upload) as a SourceImage."""
        self.check_size(len(raw_bytes))
        if mime_type is None:
            mime_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        return SourceImage(
            raw_bytes=raw_bytes,
            mime_type=mime_type,
            size_bytes=len(raw_bytes),
            filename=filename,
        )

    def check_size(self, size_bytes: int) -> None:
        if size_bytes > self._max_upload_bytes:
            raise InputTooLargeError()
