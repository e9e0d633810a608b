from outpaint.exceptions import OutpaintError


class ProcessingError(OutpaintError):
    """Base exception for remote processing failures."""


class UnknownLocationError(ProcessingError):
    """Raised when the location label is not one of the known landmarks."""

    default_message = "Please select a valid location"


class ProcessingRequestError(ProcessingError):
    """Raised when the processing endpoint answers with a non-2xx status."""

    default_message = "Failed to process image"

    def __init__(self, message: str = "", status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProcessingUnavailableError(ProcessingRequestError):
    """Raised when the endpoint cannot be reached or does not answer in time."""

    default_message = "Processing service is unavailable, please try again"
    retryable = True


class ArchiveEmptyError(ProcessingError):
    """Raised when the returned archive contains no files."""

    default_message = "No files found in the archive"


class ArchiveReadError(ProcessingError):
    """Raised when the response body is not a readable archive."""

    default_message = "Failed to process image: invalid archive"
