"""Review workflow: field validation, selection, and bulk edits."""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from uuid import UUID

from photo_portfolio.domain.patches import normalize_tag, tag_list_problem
from photo_portfolio.domain.photos import MIN_TITLE_LENGTH, PhotoStatus, StagedPhoto
from photo_portfolio.domain.staging import (
    BulkFailure,
    BulkResult,
    ErrorKind,
    OperationResult,
    StagingError,
)
from photo_portfolio.services.staging import StagedPhotoStore

MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500


@dataclass(eq=False)
class ReviewController:
    """Selection and editing rules layered over the photo store."""

    store: StagedPhotoStore
    _selected: set[UUID] = field(default_factory=set, init=False, repr=False)

    def __post_init__(self) -> None:
        self.store.add_removal_listener(self._selected.discard)

    def selected(self) -> frozenset[UUID]:
        """Return the ids currently selected."""
        return frozenset(self._selected)

    def toggle_select(self, photo_id: UUID) -> bool:
        """Flip selection for a staged photo and return whether it is selected."""
        if photo_id in self._selected:
            self._selected.discard(photo_id)
            return False
        photo = self.store.get(photo_id)
        if photo is None or photo.status is not PhotoStatus.STAGED:
            return False
        self._selected.add(photo_id)
        return True

    def select_all(self) -> None:
        """Select every staged photo."""
        self._selected.clear()
        self._selected.update(photo.id for photo in self.store.staged())

    def deselect_all(self) -> None:
        self._selected.clear()

    def validate_field(self, field_name: str, value: object) -> str | None:
        """Return an error message for an invalid field value, else None."""
        check = _FIELD_CHECKS.get(field_name)
        if check is None:
            return f"Unknown field: {field_name}"
        return check(value)

    def edit(self, photo_id: UUID, patch: Mapping[str, object]) -> OperationResult:
        """Validate every field in ``patch`` and apply it to one photo."""
        if self.store.get(photo_id) is None:
            return self.store.update(photo_id, patch)
        for field_name, value in patch.items():
            problem = self.validate_field(field_name, value)
            if problem:
                return OperationResult(
                    photo_id=photo_id,
                    error=StagingError(kind=ErrorKind.INVALID_PATCH, message=problem),
                )
        return self.store.update(photo_id, patch)

    def bulk_apply(
        self, field_name: str, value: object, ids: Iterable[UUID] | None = None
    ) -> BulkResult:
        """Apply one field value to each target photo independently.

        Targets default to the selected photos that are still staged, in
        staging order.
        """
        if ids is None:
            targets = [
                photo.id for photo in self.store.staged() if photo.id in self._selected
            ]
        else:
            targets = list(ids)
        result = BulkResult()
        for photo_id in targets:
            outcome = self.edit(photo_id, {field_name: value})
            if outcome.error is None:
                result.succeeded.append(photo_id)
            else:
                result.failed.append(
                    BulkFailure(photo_id=photo_id, error=outcome.error)
                )
        return result

    def add_tag(self, photo_id: UUID, raw_tag: str) -> OperationResult:
        """Append a tag typed by the user. Blank input changes nothing."""
        photo = self.store.get(photo_id)
        if photo is None:
            return self.store.update(photo_id, {})
        tag = normalize_tag(raw_tag)
        if not tag:
            return OperationResult(photo_id=photo_id)
        return self.edit(photo_id, {"tags": [*photo.tags, tag]})

    def remove_tag(self, photo_id: UUID, tag: str) -> OperationResult:
        photo = self.store.get(photo_id)
        if photo is None:
            return self.store.update(photo_id, {})
        target = normalize_tag(tag)
        remaining = [existing for existing in photo.tags if existing != target]
        return self.store.update(photo_id, {"tags": remaining})

    @staticmethod
    def is_complete(photo: StagedPhoto) -> bool:
        """Return True when a photo is ready to confirm."""
        return photo.is_complete


def _check_title(value: object) -> str | None:
    if not isinstance(value, str):
        return "Title must be text"
    length = len(value.strip())
    if length < MIN_TITLE_LENGTH:
        return f"Title must be at least {MIN_TITLE_LENGTH} characters"
    if length > MAX_TITLE_LENGTH:
        return f"Title must be at most {MAX_TITLE_LENGTH} characters"
    return None


def _check_description(value: object) -> str | None:
    if not isinstance(value, str):
        return "Description must be text"
    if len(value) > MAX_DESCRIPTION_LENGTH:
        return f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters"
    return None


def _check_category(value: object) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return "Category is required"
    return None


def _check_tags(value: object) -> str | None:
    if not isinstance(value, list | tuple) or not all(
        isinstance(tag, str) for tag in value
    ):
        return "Tags must be a list of text"
    return tag_list_problem([normalize_tag(tag) for tag in value])


_FIELD_CHECKS: dict[str, Callable[[object], str | None]] = {
    "title": _check_title,
    "description": _check_description,
    "category": _check_category,
    "tags": _check_tags,
}
