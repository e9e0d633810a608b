from outpaint.exceptions import OutpaintError


class UploadError(OutpaintError):
    """Raised when the storage collaborator is unreachable or rejects the upload."""

    default_message = "Failed to prepare image for processing"
