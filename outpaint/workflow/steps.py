from outpaint.exceptions import MissingImageError
from outpaint.logging.logger import Log
from outpaint.processing.dispatcher import ProcessingDispatcher
from outpaint.processing.exceptions import UnknownLocationError
from outpaint.processing.landmarks import is_known_location
from outpaint.results.lifecycle import ResultLifecycle
from outpaint.staging.base import BaseImageStager
from outpaint.workflow.pipeline import AttemptContext, WorkflowStep


class RequireImageStep(WorkflowStep):
    def run(self, context: AttemptContext) -> AttemptContext:
        if context.image is None:
            raise MissingImageError()
        return context


class ValidateLocationStep(WorkflowStep):
    """Rejects unknown labels before any upload or payment happens."""

    def run(self, context: AttemptContext) -> AttemptContext:
        if not is_known_location(context.location):
            raise UnknownLocationError(f"Unknown location: {context.location}")
        return context


class StageImageStep(WorkflowStep):
    def __init__(self, stager: BaseImageStager) -> None:
        self._stager = stager

    def run(self, context: AttemptContext) -> AttemptContext:
        if context.image is None:
            raise ValueError("AttemptContext.image must be set before staging")
        context.staged = self._stager.stage(context.image)
        Log.info(f"Staged normalized image at {context.staged.url}")
        return context


class DispatchStep(WorkflowStep):
    def __init__(self, dispatcher: ProcessingDispatcher) -> None:
        self._dispatcher = dispatcher

    def run(self, context: AttemptContext) -> AttemptContext:
        if context.staged is None:
            raise ValueError("AttemptContext.staged must be set before dispatch")
        context.extracted = self._dispatcher.dispatch(context.staged, context.location)
        return context


class PublishResultStep(WorkflowStep):
    def __init__(self, lifecycle: ResultLifecycle) -> None:
        self._lifecycle = lifecycle

    def run(self, context: AttemptContext) -> AttemptContext:
        if context.extracted is None:
            raise ValueError("AttemptContext.extracted must be set before publishing")
        context.result = self._lifecycle.publish(context.extracted, context.location)
        return context
