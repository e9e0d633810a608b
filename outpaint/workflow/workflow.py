"""Session orchestration: normalize -> stage -> pay (once) -> dispatch -> publish."""

from collections.abc import Callable, Sequence
from functools import partial
from pathlib import Path
from types import TracebackType

from outpaint.config.settings import Settings
from outpaint.exceptions import OutpaintError, UnknownWorkflowError
from outpaint.imaging.file_loader import FileLoader
from outpaint.imaging.models import NormalizedImage, SourceImage
from outpaint.imaging.normalizer import ImageNormalizer
from outpaint.logging.logger import Log
from outpaint.payment.factory import PaymentConfirmerFactory
from outpaint.payment.gate import PaymentGate
from outpaint.payment.intent_client import PaymentIntentClient
from outpaint.payment.models import GateDecision, PaymentState
from outpaint.processing.dispatcher import ProcessingDispatcher
from outpaint.results.lifecycle import ResultLifecycle
from outpaint.results.object_urls import ObjectUrlRegistry
from outpaint.staging.base import BaseImageStager
from outpaint.staging.factory import StagerFactory
from outpaint.workflow.models import AttemptOutcome, OutcomeStatus
from outpaint.workflow.pipeline import AttemptContext, WorkflowStep, run_steps
from outpaint.workflow.steps import (
    DispatchStep,
    PublishResultStep,
    RequireImageStep,
    StageImageStep,
    ValidateLocationStep,
)


class OutpaintWorkflow:
    """One user session.

    Every public operation converts failures into a FAILED outcome and records
    the message as the session's current error; only API misuse (overlapping
    attempts, confirming with nothing pending) raises.
    """

    def __init__(
        self,
        *,
        file_loader: FileLoader,
        normalizer: ImageNormalizer,
        stager: BaseImageStager,
        gate: PaymentGate,
        dispatcher: ProcessingDispatcher,
        lifecycle: ResultLifecycle,
        default_location: str,
    ) -> None:
        self._file_loader = file_loader
        self._normalizer = normalizer
        self._gate = gate
        self._lifecycle = lifecycle
        self._source: SourceImage | None = None
        self._image: NormalizedImage | None = None
        self._pending: AttemptContext | None = None
        self.location = default_location
        self._pre_payment_steps: Sequence[WorkflowStep] = (
            RequireImageStep(),
            ValidateLocationStep(),
            StageImageStep(stager),
        )
        self._post_payment_steps: Sequence[WorkflowStep] = (
            DispatchStep(dispatcher),
            PublishResultStep(lifecycle),
        )

    def __enter__(self) -> "OutpaintWorkflow":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def source(self) -> SourceImage | None:
        return self._source

    @property
    def image(self) -> NormalizedImage | None:
        return self._image

    @property
    def payment_state(self) -> PaymentState:
        return self._gate.state

    @property
    def payment_amount(self) -> int:
        return self._gate.amount

    @property
    def lifecycle(self) -> ResultLifecycle:
        return self._lifecycle

    def select_image(self, path: Path) -> AttemptOutcome:
        """Load and normalize a new source image from disk."""
        try:
            source = self._file_loader.load(path)
        except Exception as exc:
            return self._fail(exc)
        return self._accept_source(source)

    def select_image_bytes(
        self, raw_bytes: bytes, *, filename: str = "image", mime_type: str | None = None
    ) -> AttemptOutcome:
        """Same as ``select_image`` for bytes that are already in memory."""
        try:
            source = self._file_loader.from_bytes(
                raw_bytes, filename=filename, mime_type=mime_type
            )
        except Exception as exc:
            return self._fail(exc)
        return self._accept_source(source)

    def process(self, location: str | None = None) -> AttemptOutcome:
        """Start a processing attempt for the current image.

        Always stages a fresh upload. If the session has not paid yet the
        attempt parks behind the payment gate and AWAITING_PAYMENT is returned
        with the client secret for the confirmation widget.
        """
        if location is not None:
            self.location = location
        self._lifecycle.begin_attempt()
        try:
            context = run_steps(
                self._pre_payment_steps,
                AttemptContext(location=self.location, image=self._image),
            )
            decision = self._gate.enter(partial(self._finish, context))
            if decision is GateDecision.AWAITING_AUTHORIZATION:
                self._pending = context
                return AttemptOutcome(
                    status=OutcomeStatus.AWAITING_PAYMENT,
                    client_secret=self._gate.client_secret,
                )
            return AttemptOutcome(status=OutcomeStatus.OK, result=context.result)
        except Exception as exc:
            return self._fail(exc)
        finally:
            self._lifecycle.end_attempt()

    def confirm_payment(self) -> AttemptOutcome:
        """Confirm the pending payment with the configured provider, then process."""
        self._require_pending_payment()
        return self._resume(self._gate.confirm)

    def payment_succeeded(self) -> AttemptOutcome:
        """Resume after a confirmation widget outside this process reported success."""
        self._require_pending_payment()
        return self._resume(self._gate.authorization_succeeded)

    def payment_failed(self, message: str) -> AttemptOutcome:
        """Surface a declined payment verbatim; the same payment may be retried."""
        self._require_pending_payment()
        return self._fail(self._gate.authorization_failed(message))

    def download(self, destination_dir: Path) -> Path | None:
        return self._lifecycle.download(destination_dir)

    def close(self) -> None:
        self._pending = None
        self._lifecycle.close()

    def _accept_source(self, source: SourceImage) -> AttemptOutcome:
        try:
            image = self._normalizer.normalize(source)
        except Exception as exc:
            return self._fail(exc)
        self._source = source
        self._image = image
        self._lifecycle.discard()
        self._lifecycle.clear_error()
        if self._pending is not None:
            self._repark_pending(image)
        return AttemptOutcome(status=OutcomeStatus.OK, image=image)

    def _repark_pending(self, image: NormalizedImage) -> None:
        """Point the attempt waiting for payment at the new image.

        The earlier staged upload belongs to the replaced image, so the new
        one is staged once authorization succeeds.
        """
        context = AttemptContext(location=self._pending.location, image=image)
        self._gate.replace_continuation(partial(self._stage_and_finish, context))
        self._pending = context
        Log.info("Image replaced while payment is pending, will stage it after authorization")

    def _finish(self, context: AttemptContext) -> None:
        run_steps(self._post_payment_steps, context)

    def _stage_and_finish(self, context: AttemptContext) -> None:
        run_steps((*self._pre_payment_steps, *self._post_payment_steps), context)

    def _resume(self, authorize: Callable[[], None]) -> AttemptOutcome:
        context = self._pending
        self._lifecycle.begin_attempt()
        try:
            authorize()
            self._pending = None
            return AttemptOutcome(
                status=OutcomeStatus.OK,
                result=context.result if context is not None else None,
            )
        except Exception as exc:
            if self._gate.authorized:
                self._pending = None
            return self._fail(exc)
        finally:
            self._lifecycle.end_attempt()

    def _require_pending_payment(self) -> None:
        if self._gate.state is not PaymentState.AUTHORIZING:
            raise RuntimeError(
                f"No payment authorization pending (state={self._gate.state.value})"
            )

    def _fail(self, exc: Exception) -> AttemptOutcome:
        if isinstance(exc, OutpaintError):
            error = exc
            Log.error(f"Attempt failed ({type(exc).__name__}): {exc}")
        else:
            error = UnknownWorkflowError(str(exc))
            Log.exception(f"Unexpected failure: {exc!r}")
        message = str(error)
        self._lifecycle.fail(message)
        return AttemptOutcome(
            status=OutcomeStatus.FAILED,
            error=message,
            error_kind=type(error).__name__,
            retryable=error.retryable,
        )


def build_workflow(
    settings: Settings,
    object_urls: ObjectUrlRegistry | None = None,
) -> OutpaintWorkflow:
    """Build an OutpaintWorkflow with the adapters selected in settings."""
    object_urls = object_urls or ObjectUrlRegistry()
    gate = PaymentGate(
        intent_client=PaymentIntentClient(
            url=settings.payment_intent_url,
            timeout_seconds=settings.payment_timeout_seconds,
        ),
        confirmer=PaymentConfirmerFactory.create(settings),
        amount=settings.payment_amount,
    )
    dispatcher = ProcessingDispatcher(
        url=settings.processing_url,
        object_urls=object_urls,
        tourist_spot=settings.processing_tourist_spot,
        timeout_seconds=settings.processing_timeout_seconds,
    )
    return OutpaintWorkflow(
        file_loader=FileLoader(max_upload_bytes=settings.max_upload_bytes),
        normalizer=ImageNormalizer(
            max_width=settings.max_image_width,
            max_height=settings.max_image_height,
        ),
        stager=StagerFactory.create(settings),
        gate=gate,
        dispatcher=dispatcher,
        lifecycle=ResultLifecycle(object_urls, result_filename=settings.result_filename),
        default_location=settings.default_location,
    )
