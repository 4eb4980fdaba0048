"""Domain models for staged photos."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID

MIN_TITLE_LENGTH = 3


class PhotoStatus(StrEnum):
    """Lifecycle state of a staged photo. Transitions only go forward."""

    STAGED = "staged"
    CONFIRMED = "confirmed"


@dataclass(frozen=True)
class PhotoFile:
    """A locally selected file with its declared type and size."""

    name: str
    mime_type: str
    size_bytes: int
    data: bytes = field(default=b"", repr=False)


@dataclass(frozen=True)
class PreviewHandle:
    """Revocable reference to a displayable rendering of a file."""

    url: str


@dataclass(frozen=True)
class StagedPhoto:
    """A photo held locally for review before submission."""

    id: UUID
    source: PhotoFile
    preview: PreviewHandle
    created_at: datetime
    status: PhotoStatus = PhotoStatus.STAGED
    title: str = ""
    description: str = ""
    category: str | None = None
    tags: tuple[str, ...] = ()

    @property
    def is_complete(self) -> bool:
        """Return True when the photo has a usable title and a category."""
        return len(self.title.strip()) >= MIN_TITLE_LENGTH and bool(self.category)
