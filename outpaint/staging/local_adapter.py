import uuid
from pathlib import Path

from outpaint.imaging.models import NormalizedImage
from outpaint.staging.base import BaseImageStager
from outpaint.staging.exceptions import UploadError
from outpaint.staging.models import StagedImageReference


class LocalStagerAdapter(BaseImageStager):
    """Stages images into a local directory and returns ``file://`` URIs.

    Only useful when the processing service runs on the same host.
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    def stage(self, image: NormalizedImage) -> StagedImageReference:
        path = self._root / f"{uuid.uuid4().hex}.png"
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            path.write_bytes(image.png_bytes)
        except OSError as exc:
            raise UploadError() from exc
        return StagedImageReference(url=path.resolve().as_uri())
