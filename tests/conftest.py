import io
import zipfile
from collections.abc import Callable

import pytest
from PIL import Image


def make_image_bytes(
    width: int,
    height: int,
    fmt: str = "PNG",
    mode: str = "RGB",
    color: object = (200, 30, 30),
) -> bytes:
    buf = io.BytesIO()
    Image.new(mode, (width, height), color).save(buf, format=fmt)
    return buf.getvalue()


def make_zip_bytes(entries: list[tuple[str, bytes]]) -> bytes:
    """Build a ZIP whose central directory lists ``entries`` in the given order.

    Names ending in '/' become directory entries.
    """
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, data in entries:
            if name.endswith("/"):
                zf.writestr(zipfile.ZipInfo(name), b"")
            else:
                zf.writestr(name, data)
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    """A small 64x32 PNG."""
    return make_image_bytes(64, 32)


@pytest.fixture()
def large_photo_bytes() -> bytes:
    """A 2000x1000 JPEG, twice as wide as it is tall."""
    return make_image_bytes(2000, 1000, fmt="JPEG")


@pytest.fixture()
def result_png_bytes() -> bytes:
    return make_image_bytes(16, 16, color=(10, 120, 240))


@pytest.fixture()
def zip_factory() -> Callable[[list[tuple[str, bytes]]], bytes]:
    return make_zip_bytes


@pytest.fixture()
def image_factory() -> Callable[..., bytes]:
    return make_image_bytes
