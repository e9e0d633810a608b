import httpx

from outpaint.logging.logger import Log
from outpaint.processing.archive import read_first_file
from outpaint.processing.exceptions import (
    ProcessingRequestError,
    ProcessingUnavailableError,
    UnknownLocationError,
)
from outpaint.processing.landmarks import DEFAULT_TOURIST_SPOT, is_known_location
from outpaint.processing.models import ExtractedImage, OutpaintRequest
from outpaint.results.object_urls import ObjectUrlRegistry
from outpaint.staging.models import StagedImageReference

ARCHIVE_NAME = "outpainted_output.zip"


class ProcessingDispatcher:
    """Sends a staged image to the outpainting endpoint and unpacks the result."""

    def __init__(
        self,
        *,
        url: str,
        object_urls: ObjectUrlRegistry,
        tourist_spot: str = DEFAULT_TOURIST_SPOT,
        timeout_seconds: int | None = 300,
        client: httpx.Client | None = None,
    ) -> None:
        self._url = url
        self._object_urls = object_urls
        self._tourist_spot = tourist_spot
        # 0 or None: wait indefinitely
        self._client = client or httpx.Client(timeout=timeout_seconds or None)

    def dispatch(self, staged: StagedImageReference, location: str) -> ExtractedImage:
        """Run one processing request. Never retried here.

        Raises:
            UnknownLocationError: if ``location`` is not a known landmark.
            ProcessingRequestError: on a non-2xx response.
            ProcessingUnavailableError: on connection failure or timeout.
            ArchiveEmptyError: if the archive has no files.
            ArchiveReadError: if the body is not a readable archive.
        """
        if not is_known_location(location):
            raise UnknownLocationError(f"Unknown location: {location}")

        body = OutpaintRequest(
            image=staged.url,
            location=location,
            tourist_spot=self._tourist_spot,
        )
        Log.info(f"Dispatching {staged.url} for '{location}'")
        response = self._post(body)

        # The archive is held behind a transient URL only while it is read.
        with self._object_urls.scoped(
            response.content,
            name=ARCHIVE_NAME,
            media_type=response.headers.get("content-type"),
        ) as archive:
            extracted = read_first_file(archive.path)

        if extracted.entry_count > 1:
            Log.info(
                f"Archive holds {extracted.entry_count} files, using first: {extracted.name}"
            )
        Log.info(f"Extracted {extracted.name} ({len(extracted.data)} bytes)")
        return extracted

    def _post(self, body: OutpaintRequest) -> httpx.Response:
        try:
            response = self._client.post(self._url, json=body.model_dump())
        except httpx.TimeoutException as exc:
            raise ProcessingUnavailableError(
                "Processing timed out, please try again"
            ) from exc
        except httpx.HTTPError as exc:
            raise ProcessingUnavailableError() from exc

        if not response.is_success:
            raise ProcessingRequestError(
                f"Failed to process image: {response.reason_phrase}",
                status_code=response.status_code,
            )
        return response
