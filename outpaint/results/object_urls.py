"""Revocable URLs for in-memory blobs.

Each URL is backed by a file in a private temporary directory. Revoking a URL
deletes its file; closing the registry deletes the directory, so nothing
outlives the session that created it.
"""

import mimetypes
import shutil
import tempfile
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType

from outpaint.logging.logger import Log


@dataclass(frozen=True)
class ObjectUrl:
    url: str
    path: Path
    media_type: str
    size_bytes: int


class ObjectUrlRegistry:
    """Creates and revokes ``file://`` URLs for blobs."""

    def __init__(self, root: Path | None = None) -> None:
        self._owns_root = root is None
        self._root = Path(tempfile.mkdtemp(prefix="outpaint-")) if root is None else root
        self._live: dict[str, ObjectUrl] = {}
        self._closed = False

    def __enter__(self) -> "ObjectUrlRegistry":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def live_count(self) -> int:
        return len(self._live)

    def is_live(self, url: str) -> bool:
        return url in self._live

    def create(self, data: bytes, *, name: str = "blob", media_type: str | None = None) -> ObjectUrl:
        """Persist ``data`` and return a new live URL for it."""
        if self._closed:
            raise RuntimeError("ObjectUrlRegistry is closed")
        if media_type is None:
            media_type = mimetypes.guess_type(name)[0] or "application/octet-stream"
        self._root.mkdir(parents=True, exist_ok=True)
        path = self._root / f"{uuid.uuid4().hex}{Path(name).suffix}"
        path.write_bytes(data)
        handle = ObjectUrl(
            url=path.as_uri(),
            path=path,
            media_type=media_type,
            size_bytes=len(data),
        )
        self._live[handle.url] = handle
        Log.debug(f"Created object URL {handle.url} ({len(data)} bytes)")
        return handle

    def revoke(self, url: str) -> None:
        """Release ``url``. Revoking an unknown or already revoked URL is a no-op."""
        handle = self._live.pop(url, None)
        if handle is None:
            return
        handle.path.unlink(missing_ok=True)
        Log.debug(f"Revoked object URL {url}")

    def resolve(self, url: str) -> ObjectUrl:
        handle = self._live.get(url)
        if handle is None:
            raise KeyError(f"Object URL is not live: {url}")
        return handle

    @contextmanager
    def scoped(
        self, data: bytes, *, name: str = "blob", media_type: str | None = None
    ) -> Iterator[ObjectUrl]:
        """Yield a URL that is revoked when the block exits, even on error."""
        handle = self.create(data, name=name, media_type=media_type)
        try:
            yield handle
        finally:
            self.revoke(handle.url)

    def close(self) -> None:
        """Revoke every live URL and remove the backing directory."""
        if self._closed:
            return
        for url in list(self._live):
            self.revoke(url)
        if self._owns_root:
            shutil.rmtree(self._root, ignore_errors=True)
        self._closed = True
