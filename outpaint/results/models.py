from dataclasses import dataclass


@dataclass(frozen=True)
class ProcessingResult:
    """The displayable/downloadable outpainted image of one attempt."""

    url: str
    filename: str
    media_type: str
    size_bytes: int
    location: str
