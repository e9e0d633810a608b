from abc import ABC, abstractmethod

from outpaint.imaging.models import NormalizedImage
from outpaint.staging.models import StagedImageReference


class BaseImageStager(ABC):
    """Contract for all object-storage upload adapters."""

    @abstractmethod
    def stage(self, image: NormalizedImage) -> StagedImageReference:
        """Upload the normalized image and return a URL the processing service can fetch.

        Every call uploads a fresh copy; adapters must not cache references.

        Raises:
            UploadError: on any failure.
        """
