import json
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from outpaint.processing.dispatcher import ProcessingDispatcher
from outpaint.processing.exceptions import (
    ArchiveEmptyError,
    ProcessingRequestError,
    ProcessingUnavailableError,
    UnknownLocationError,
)
from outpaint.processing.landmarks import DEFAULT_LOCATION, LANDMARKS, is_known_location
from outpaint.results.object_urls import ObjectUrlRegistry
from outpaint.staging.models import StagedImageReference

PROCESSING_URL = "http://outpaint.test/outpaint"
STAGED = StagedImageReference(url="https://imagedelivery.net/h/abc/public")

ZipFactory = Callable[[list[tuple[str, bytes]]], bytes]


def _dispatcher(
    handler: object, registry: ObjectUrlRegistry
) -> ProcessingDispatcher:
    client = httpx.Client(transport=httpx.MockTransport(handler))  # type: ignore[arg-type]
    return ProcessingDispatcher(url=PROCESSING_URL, object_urls=registry, client=client)


@pytest.fixture()
def registry(tmp_path: Path) -> ObjectUrlRegistry:
    return ObjectUrlRegistry(root=tmp_path / "urls")


class TestLandmarks:
    def test_forty_unique_labels(self) -> None:
        assert len(LANDMARKS) == 40
        assert len(set(LANDMARKS)) == 40

    def test_default_is_known(self) -> None:
        assert DEFAULT_LOCATION == "Eiffel Tower (Paris, France)"
        assert is_known_location(DEFAULT_LOCATION)

    def test_unknown_label(self) -> None:
        assert not is_known_location("Eiffel Tower")


class TestDispatchRequest:
    def test_posts_image_location_and_tourist_spot(
        self, registry: ObjectUrlRegistry, zip_factory: ZipFactory
    ) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=zip_factory([("out.png", b"PNG")]))

        _dispatcher(handler, registry).dispatch(STAGED, "Great Wall of China (China)")

        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == PROCESSING_URL
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.read()) == {
            "image": STAGED.url,
            "location": "Great Wall of China (China)",
            "tourist_spot": "Eiffel Tower",
        }

    def test_unknown_location_fails_before_any_request(self, registry: ObjectUrlRegistry) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200)

        with pytest.raises(UnknownLocationError, match="Atlantis"):
            _dispatcher(handler, registry).dispatch(STAGED, "Atlantis")

        assert calls == []


class TestDispatchResponse:
    def test_returns_first_archive_entry(
        self, registry: ObjectUrlRegistry, zip_factory: ZipFactory
    ) -> None:
        body = zip_factory([("out.png", b"FIRST"), ("mask.png", b"SECOND")])
        dispatcher = _dispatcher(lambda request: httpx.Response(200, content=body), registry)

        extracted = dispatcher.dispatch(STAGED, DEFAULT_LOCATION)

        assert extracted.name == "out.png"
        assert extracted.data == b"FIRST"

    def test_transient_archive_url_is_revoked(
        self, registry: ObjectUrlRegistry, zip_factory: ZipFactory
    ) -> None:
        body = zip_factory([("out.png", b"PNG")])
        dispatcher = _dispatcher(lambda request: httpx.Response(200, content=body), registry)

        dispatcher.dispatch(STAGED, DEFAULT_LOCATION)

        assert registry.live_count == 0

    def test_transient_archive_url_is_revoked_on_failure(
        self, registry: ObjectUrlRegistry, zip_factory: ZipFactory
    ) -> None:
        body = zip_factory([])
        dispatcher = _dispatcher(lambda request: httpx.Response(200, content=body), registry)

        with pytest.raises(ArchiveEmptyError, match="No files found in the archive"):
            dispatcher.dispatch(STAGED, DEFAULT_LOCATION)

        assert registry.live_count == 0

    def test_non_2xx_carries_status_text(self, registry: ObjectUrlRegistry) -> None:
        dispatcher = _dispatcher(lambda request: httpx.Response(503), registry)

        with pytest.raises(ProcessingRequestError) as exc_info:
            dispatcher.dispatch(STAGED, DEFAULT_LOCATION)

        assert str(exc_info.value) == "Failed to process image: Service Unavailable"
        assert exc_info.value.status_code == 503
        assert not exc_info.value.retryable

    def test_timeout_is_retryable(self, registry: ObjectUrlRegistry) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("read timed out", request=request)

        with pytest.raises(ProcessingUnavailableError, match="timed out") as exc_info:
            _dispatcher(handler, registry).dispatch(STAGED, DEFAULT_LOCATION)

        assert exc_info.value.retryable

    def test_connection_failure_is_retryable(self, registry: ObjectUrlRegistry) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ProcessingUnavailableError) as exc_info:
            _dispatcher(handler, registry).dispatch(STAGED, DEFAULT_LOCATION)

        assert exc_info.value.retryable

    def test_two_dispatches_are_independent(
        self, registry: ObjectUrlRegistry, zip_factory: ZipFactory
    ) -> None:
        bodies = iter(
            [zip_factory([("out.png", b"ONE")]), zip_factory([("out.png", b"TWO")])]
        )
        dispatcher = _dispatcher(
            lambda request: httpx.Response(200, content=next(bodies)), registry
        )

        first = dispatcher.dispatch(STAGED, DEFAULT_LOCATION)
        second = dispatcher.dispatch(STAGED, DEFAULT_LOCATION)

        assert (first.data, second.data) == (b"ONE", b"TWO")
