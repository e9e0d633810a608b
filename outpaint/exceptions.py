from typing import ClassVar


class OutpaintError(Exception):
    """Base exception for every failure the workflow reports to the user.

    ``str(exc)`` is the user-facing message. Subclasses carry a default used
    when they are raised without one.
    """

    default_message: ClassVar[str] = "Failed to process image"
    retryable: ClassVar[bool] = False

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)


class MissingImageError(OutpaintError):
    """Raised when processing is requested before an image was chosen."""

    default_message = "Please provide an image."


class UnknownWorkflowError(OutpaintError):
    """Catch-all for failures that carry no recognizable message."""
