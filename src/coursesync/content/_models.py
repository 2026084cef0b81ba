"""Content data models."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ContentFile:
    """One authored content unit on the working tree.

    Attributes:
        relative_path: Slash-separated path relative to the content root.
        content: Full text payload.
    """

    relative_path: str
    content: str
