"""Decodes a source image and bounds it to the configured maximum size."""

import io

from PIL import Image, ImageOps, UnidentifiedImageError

from outpaint.imaging.exceptions import DecodeError
from outpaint.imaging.models import NormalizedGeometry, NormalizedImage, SourceImage
from outpaint.logging.logger import Log

DEFAULT_MAX_WIDTH = 1024
DEFAULT_MAX_HEIGHT = 1024


def fit_within(
    width: int,
    height: int,
    max_width: int = DEFAULT_MAX_WIDTH,
    max_height: int = DEFAULT_MAX_HEIGHT,
) -> NormalizedGeometry:
    """Scale (width, height) down to fit the bounding box, preserving aspect ratio.

    The scale factor is ``min(1, max_width / width, max_height / height)``, so
    images already inside the box are returned unchanged and nothing is ever
    upscaled.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    scale = min(1.0, max_width / width, max_height / height)
    if scale == 1.0:
        return NormalizedGeometry(width=width, height=height)
    return NormalizedGeometry(
        width=min(max_width, max(1, round(width * scale))),
        height=min(max_height, max(1, round(height * scale))),
    )


class ImageNormalizer:
    """Produces the right-sized PNG that is both displayed and uploaded."""

    def __init__(
        self,
        max_width: int = DEFAULT_MAX_WIDTH,
        max_height: int = DEFAULT_MAX_HEIGHT,
    ) -> None:
        self._max_width = max_width
        self._max_height = max_height

    def normalize(self, source: SourceImage) -> NormalizedImage:
        """Decode, orient, resize and re-encode the source image.

        Raises:
            DecodeError: if the bytes are not a readable raster image.
        """
        image = self._decode(source)
        natural = NormalizedGeometry(width=image.width, height=image.height)
        geometry = fit_within(
            image.width, image.height, self._max_width, self._max_height
        )
        if geometry != natural:
            image = image.resize(
                (geometry.width, geometry.height), Image.Resampling.LANCZOS
            )
        png_bytes = self._encode_png(image)
        Log.info(
            f"Normalized {source.filename} from {natural.width}x{natural.height} "
            f"to {geometry.width}x{geometry.height} ({len(png_bytes)} bytes)"
        )
        return NormalizedImage(geometry=geometry, natural=natural, png_bytes=png_bytes)

    @staticmethod
    def _decode(source: SourceImage) -> Image.Image:
        try:
            with Image.open(io.BytesIO(source.raw_bytes)) as opened:
                opened.load()
                image = ImageOps.exif_transpose(opened)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
            raise DecodeError() from exc
        if image.mode not in ("RGB", "RGBA"):
            has_alpha = "A" in image.getbands() or "transparency" in image.info
            image = image.convert("RGBA" if has_alpha else "RGB")
        return image

    @staticmethod
    def _encode_png(image: Image.Image) -> bytes:
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()
