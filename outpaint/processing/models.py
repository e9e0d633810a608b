from dataclasses import dataclass

from pydantic import BaseModel


class OutpaintRequest(BaseModel):
    """JSON body sent to the processing endpoint."""

    image: str
    location: str
    tourist_spot: str


@dataclass(frozen=True)
class ExtractedImage:
    """The archive entry chosen as the result."""

    name: str
    data: bytes
    entry_count: int = 1
