from dataclasses import dataclass


@dataclass(frozen=True)
class SourceImage:
    """The file the user selected, exactly as read."""

    raw_bytes: bytes
    mime_type: str
    size_bytes: int
    filename: str = "image"


@dataclass(frozen=True)
class NormalizedGeometry:
    """Display and upload dimensions derived from the source image."""

    width: int
    height: int

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


@dataclass(frozen=True)
class NormalizedImage:
    """Source image resampled to its normalized geometry and encoded as PNG."""

    geometry: NormalizedGeometry
    natural: NormalizedGeometry
    png_bytes: bytes
    mime_type: str = "image/png"
    filename: str = "image.png"

    @property
    def was_downscaled(self) -> bool:
        return self.geometry != self.natural
