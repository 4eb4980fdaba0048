"""Result and configuration types for the staging pipeline."""

from dataclasses import dataclass, field
from enum import StrEnum
from uuid import UUID

from photo_portfolio.domain.photos import PhotoFile, StagedPhoto

BYTES_PER_MB = 1024 * 1024
DEFAULT_ACCEPTED_FORMATS = frozenset(
    {"image/jpeg", "image/png", "image/gif", "image/webp"}
)


class ErrorKind(StrEnum):
    """Expected failure kinds reported by the staging pipeline."""

    INVALID_FORMAT = "invalid_format"
    TOO_LARGE = "too_large"
    DUPLICATE = "duplicate"
    TOO_MANY = "too_many"
    NOT_FOUND = "not_found"
    INVALID_PATCH = "invalid_patch"


class StoreInvariantError(RuntimeError):
    """Raised when the store detects a broken internal invariant."""


@dataclass(frozen=True)
class StagingError:
    """A recoverable error returned to the caller."""

    kind: ErrorKind
    message: str
    file_name: str | None = None


@dataclass(frozen=True)
class StagingConfig:
    """Limits applied when validating candidate files."""

    max_files: int = 50
    max_size_bytes: int = 10 * BYTES_PER_MB
    accepted_mime_prefixes: frozenset[str] = DEFAULT_ACCEPTED_FORMATS

    @property
    def accepted_categories(self) -> frozenset[str]:
        """Top-level MIME categories, e.g. ``image`` for ``image/png``."""
        return frozenset(
            prefix.split("/", 1)[0].lower() for prefix in self.accepted_mime_prefixes
        )

    @property
    def max_size_label(self) -> str:
        return f"{self.max_size_bytes / BYTES_PER_MB:g}MB"


@dataclass(frozen=True)
class FileVerdict:
    """Decision for a single candidate file."""

    accepted: bool
    reason: StagingError | None = None


@dataclass(frozen=True)
class BatchValidation:
    """Partition of a batch into accepted files and per-file errors."""

    valid_files: list[PhotoFile]
    errors: list[StagingError]


@dataclass(frozen=True)
class StageResult:
    """Records created by a stage call and the files that were rejected."""

    created: list[StagedPhoto]
    errors: list[StagingError]


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a single-record operation."""

    photo_id: UUID
    error: StagingError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class BulkFailure:
    """A photo a bulk edit could not be applied to."""

    photo_id: UUID
    error: StagingError


@dataclass(frozen=True)
class BulkResult:
    """Aggregate outcome of a bulk edit."""

    succeeded: list[UUID] = field(default_factory=list)
    failed: list[BulkFailure] = field(default_factory=list)
