from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from outpaint.imaging.models import NormalizedImage
from outpaint.processing.models import ExtractedImage
from outpaint.results.models import ProcessingResult
from outpaint.staging.models import StagedImageReference


@dataclass(slots=True)
class AttemptContext:
    """Accumulates data as one processing attempt moves through its steps."""

    location: str
    image: NormalizedImage | None = None
    staged: StagedImageReference | None = None
    extracted: ExtractedImage | None = None
    result: ProcessingResult | None = None


class WorkflowStep(ABC):
    @abstractmethod
    def run(self, context: AttemptContext) -> AttemptContext:
        raise NotImplementedError


def run_steps(steps: Sequence[WorkflowStep], context: AttemptContext) -> AttemptContext:
    for step in steps:
        context = step.run(context)
    return context
