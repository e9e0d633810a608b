from dataclasses import dataclass


@dataclass(frozen=True)
class StagedImageReference:
    """Externally fetchable URL of one uploaded copy of the normalized image."""

    url: str
