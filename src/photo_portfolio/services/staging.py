"""Store that owns staged photos and their preview handles."""

import asyncio
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from pydantic import ValidationError

from photo_portfolio.domain.patches import (
    IMMUTABLE_FIELDS,
    PhotoPatch,
    describe_validation_error,
)
from photo_portfolio.domain.photos import (
    PhotoFile,
    PhotoStatus,
    PreviewHandle,
    StagedPhoto,
)
from photo_portfolio.domain.staging import (
    ErrorKind,
    OperationResult,
    StageResult,
    StagingConfig,
    StagingError,
    StoreInvariantError,
)
from photo_portfolio.services.validation import validate_batch

logger = logging.getLogger(__name__)

RemovalListener = Callable[[UUID], None]


class PreviewFactory(Protocol):
    """Creates and releases displayable previews for files."""

    async def create(self, file: PhotoFile) -> PreviewHandle:
        """Return a new preview handle for a file."""

    def revoke(self, handle: PreviewHandle) -> None:
        """Release a preview handle."""


@dataclass(eq=False)
class StagedPhotoStore:
    """Ordered collection of staged and confirmed photos.

    Records are frozen; every mutation swaps in a new record under the same
    id, so views handed to callers never change underneath them. Preview
    handles are released on every removal path, including ``close``.
    """

    config: StagingConfig
    previews: PreviewFactory
    id_factory: Callable[[], UUID] = uuid4
    _photos: dict[UUID, StagedPhoto] = field(
        default_factory=dict, init=False, repr=False
    )
    _issued_ids: set[UUID] = field(default_factory=set, init=False, repr=False)
    _removal_listeners: list[RemovalListener] = field(
        default_factory=list, init=False, repr=False
    )
    _stage_lock: asyncio.Lock = field(
        default_factory=asyncio.Lock, init=False, repr=False
    )
    _closed: bool = field(default=False, init=False, repr=False)

    async def stage(self, files: Iterable[PhotoFile]) -> StageResult:
        """Validate a batch and create a staged record per accepted file.

        If the store is closed while a preview is being created, the new
        handle is released and the rest of the batch is skipped. If the
        preview factory fails, records from this batch are rolled back.
        """
        batch = list(files)
        async with self._stage_lock:
            if self._closed:
                raise StoreInvariantError("Cannot stage photos on a closed store")
            validation = validate_batch(batch, self.config)
            created: list[StagedPhoto] = []
            try:
                for file in validation.valid_files:
                    photo = await self._build_photo(file)
                    if self._closed:
                        self.previews.revoke(photo.preview)
                        logger.warning(
                            "Store closed while staging, skipped %d files",
                            len(validation.valid_files) - len(created),
                        )
                        break
                    self._photos[photo.id] = photo
                    created.append(photo)
            except Exception:
                logger.exception("Preview creation failed, rolling back batch")
                for photo in created:
                    self.remove(photo.id)
                raise
        for error in validation.errors:
            logger.info("Rejected %s: %s", error.file_name or "batch", error.kind)
        logger.info(
            "Staged %d of %d files (%d rejected)",
            len(created),
            len(batch),
            len(validation.errors),
        )
        return StageResult(created=created, errors=validation.errors)

    def update(
        self, photo_id: UUID, patch: Mapping[str, object] | PhotoPatch
    ) -> OperationResult:
        """Merge metadata fields into a photo. Nothing is written on failure."""
        photo = self._photos.get(photo_id)
        if photo is None:
            return _not_found(photo_id)
        if isinstance(patch, PhotoPatch):
            parsed = patch
        else:
            locked = IMMUTABLE_FIELDS.intersection(patch)
            if locked:
                return _invalid_patch(
                    photo_id, f"Fields cannot be changed: {', '.join(sorted(locked))}"
                )
            try:
                parsed = PhotoPatch.model_validate(dict(patch))
            except ValidationError as exc:
                return _invalid_patch(photo_id, describe_validation_error(exc))
        self._photos[photo_id] = replace(photo, **parsed.changes())
        return OperationResult(photo_id=photo_id)

    def remove(self, photo_id: UUID) -> None:
        """Remove a photo and release its preview. Missing ids are ignored."""
        photo = self._photos.pop(photo_id, None)
        if photo is None:
            return
        self._release(photo)
        logger.info("Removed photo %s", photo_id)
        for listener in list(self._removal_listeners):
            listener(photo_id)

    def confirm(self, photo_id: UUID) -> OperationResult:
        """Mark a staged photo as confirmed."""
        photo = self._photos.get(photo_id)
        if photo is None:
            return _not_found(photo_id)
        if photo.status is PhotoStatus.STAGED:
            self._photos[photo_id] = replace(photo, status=PhotoStatus.CONFIRMED)
            logger.info("Confirmed photo %s", photo_id)
        return OperationResult(photo_id=photo_id)

    def confirm_all(self) -> list[UUID]:
        """Confirm every photo that is staged right now."""
        photo_ids = [photo.id for photo in self.staged()]
        for photo_id in photo_ids:
            self.confirm(photo_id)
        return photo_ids

    def clear(self) -> list[UUID]:
        """Remove every staged photo. Confirmed photos are kept."""
        photo_ids = [photo.id for photo in self.staged()]
        for photo_id in photo_ids:
            self.remove(photo_id)
        if photo_ids:
            logger.info("Cleared %d staged photos", len(photo_ids))
        return photo_ids

    def close(self) -> None:
        """Release every preview handle still held by the store."""
        if self._closed:
            return
        self._closed = True
        for photo in self._photos.values():
            self.previews.revoke(photo.preview)
        logger.info("Released %d preview handles", len(self._photos))

    def get(self, photo_id: UUID) -> StagedPhoto | None:
        """Return a photo by id, if present."""
        return self._photos.get(photo_id)

    def photos(self) -> tuple[StagedPhoto, ...]:
        """Return all photos in staging order."""
        return tuple(self._photos.values())

    def staged(self) -> tuple[StagedPhoto, ...]:
        """Return staged photos in staging order."""
        return self._with_status(PhotoStatus.STAGED)

    def confirmed(self) -> tuple[StagedPhoto, ...]:
        """Return confirmed photos in staging order."""
        return self._with_status(PhotoStatus.CONFIRMED)

    def add_removal_listener(self, listener: RemovalListener) -> None:
        """Call ``listener`` with the id of every photo that gets removed."""
        self._removal_listeners.append(listener)

    @property
    def closed(self) -> bool:
        return self._closed

    async def _build_photo(self, file: PhotoFile) -> StagedPhoto:
        photo_id = self._next_id()
        preview = await self.previews.create(file)
        return StagedPhoto(
            id=photo_id,
            source=file,
            preview=preview,
            created_at=datetime.now(tz=UTC),
        )

    def _next_id(self) -> UUID:
        photo_id = self.id_factory()
        if photo_id in self._issued_ids:
            raise StoreInvariantError(f"Photo id {photo_id} was already issued")
        self._issued_ids.add(photo_id)
        return photo_id

    def _release(self, photo: StagedPhoto) -> None:
        # After close every handle is already revoked.
        if not self._closed:
            self.previews.revoke(photo.preview)

    def _with_status(self, status: PhotoStatus) -> tuple[StagedPhoto, ...]:
        return tuple(photo for photo in self._photos.values() if photo.status is status)


def _not_found(photo_id: UUID) -> OperationResult:
    return OperationResult(
        photo_id=photo_id,
        error=StagingError(
            kind=ErrorKind.NOT_FOUND, message=f"Photo {photo_id} not found"
        ),
    )


def _invalid_patch(photo_id: UUID, message: str) -> OperationResult:
    return OperationResult(
        photo_id=photo_id,
        error=StagingError(kind=ErrorKind.INVALID_PATCH, message=message),
    )
