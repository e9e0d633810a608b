import shutil
from pathlib import Path

from outpaint.logging.logger import Log
from outpaint.processing.models import ExtractedImage
from outpaint.results.models import ProcessingResult
from outpaint.results.object_urls import ObjectUrlRegistry

DEFAULT_RESULT_FILENAME = "result.png"


class ResultLifecycle:
    """User-visible state of the session: current result, error and progress.

    Only ``publish`` writes the current result, and it revokes the URL it
    replaces.
    """

    def __init__(
        self,
        object_urls: ObjectUrlRegistry,
        result_filename: str = DEFAULT_RESULT_FILENAME,
    ) -> None:
        self._object_urls = object_urls
        self._result_filename = result_filename
        self._result: ProcessingResult | None = None
        self._error: str | None = None
        self._is_processing = False

    @property
    def result(self) -> ProcessingResult | None:
        return self._result

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def is_processing(self) -> bool:
        return self._is_processing

    def begin_attempt(self) -> None:
        """Clear the previous error and mark an attempt as in flight."""
        if self._is_processing:
            raise RuntimeError("A processing attempt is already in progress")
        self._error = None
        self._is_processing = True

    def end_attempt(self) -> None:
        self._is_processing = False

    def fail(self, message: str) -> None:
        """Replace the current error message."""
        self._error = message

    def clear_error(self) -> None:
        self._error = None

    def publish(self, extracted: ExtractedImage, location: str) -> ProcessingResult:
        """Expose ``extracted`` as the current result, revoking the one it supersedes."""
        handle = self._object_urls.create(extracted.data, name=extracted.name)
        previous = self._result
        self._result = ProcessingResult(
            url=handle.url,
            filename=extracted.name,
            media_type=handle.media_type,
            size_bytes=handle.size_bytes,
            location=location,
        )
        if previous is not None:
            self._object_urls.revoke(previous.url)
        Log.info(f"Result ready at {handle.url}")
        return self._result

    def discard(self) -> None:
        """Drop the current result, e.g. when a new source image is chosen."""
        if self._result is not None:
            self._object_urls.revoke(self._result.url)
            self._result = None

    def download(self, destination_dir: Path) -> Path | None:
        """Save the current result as ``<destination_dir>/<result filename>``.

        Returns the written path, or None when there is no result. State is
        left untouched.
        """
        if self._result is None:
            return None
        source = self._object_urls.resolve(self._result.url).path
        destination_dir.mkdir(parents=True, exist_ok=True)
        target = destination_dir / self._result_filename
        shutil.copyfile(source, target)
        Log.info(f"Saved result to {target}")
        return target

    def close(self) -> None:
        self.discard()
        self._object_urls.close()
