from outpaint.exceptions import OutpaintError


class ImagingError(OutpaintError):
    """Base exception for image acquisition and normalization."""


class InputTooLargeError(ImagingError):
    """Raised when the selected file exceeds the upload size limit."""

    default_message = "Image size should be less than 10MB"


class DecodeError(ImagingError):
    """Raised when the selected file cannot be decoded as a raster image."""

    default_message = "Error reading file"
