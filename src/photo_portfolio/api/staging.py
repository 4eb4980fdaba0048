"""Staging endpoints backing the upload and review screens."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID  # noqa: TC003

from fastapi import (
    APIRouter,
    Body,
    File,
    HTTPException,
    Query,
    Request,
    UploadFile,
    status,
)
from fastapi.responses import Response

from photo_portfolio.api.staging_models import BulkApplyRequest, TagRequest
from photo_portfolio.domain.photos import PhotoFile, PhotoStatus, StagedPhoto
from photo_portfolio.domain.staging import ErrorKind, OperationResult, StagingError

if TYPE_CHECKING:
    from photo_portfolio.containers import AppContainer

router = APIRouter(prefix="/staging", tags=["staging"])

_ERROR_STATUS = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_PATCH: 422,
}


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.post("/photos")
async def upload_photos(
    request: Request, files: list[UploadFile] = File(...)
) -> dict[str, object]:
    """Stage uploaded files and report per-file rejections."""
    container = _container(request)
    candidates = []
    for upload in files:
        data = await upload.read()
        candidates.append(
            PhotoFile(
                name=upload.filename or "",
                mime_type=upload.content_type or "application/octet-stream",
                size_bytes=len(data),
                data=data,
            )
        )
    result = await container.upload_service.add_files(candidates)
    return {
        "created": [_serialize_photo(photo) for photo in result.created],
        "errors": [_serialize_error(error) for error in result.errors],
    }


@router.get("/photos")
async def list_photos(
    request: Request,
    status_filter: PhotoStatus | None = Query(default=None, alias="status"),
) -> dict[str, object]:
    """Return photos in staging order, optionally filtered by status."""
    store = _container(request).photo_store
    if status_filter is PhotoStatus.STAGED:
        photos = store.staged()
    elif status_filter is PhotoStatus.CONFIRMED:
        photos = store.confirmed()
    else:
        photos = store.photos()
    return {"photos": [_serialize_photo(photo) for photo in photos]}


@router.get("/photos/{photo_id}")
async def photo_detail(photo_id: UUID, request: Request) -> dict[str, object]:
    photo = _container(request).photo_store.get(photo_id)
    if photo is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return _serialize_photo(photo)


@router.patch("/photos/{photo_id}")
async def edit_photo(
    photo_id: UUID, request: Request, patch: dict[str, Any] = Body(...)
) -> dict[str, object]:
    """Validate and apply metadata edits to one photo."""
    container = _container(request)
    _raise_for(container.review_controller.edit(photo_id, patch))
    return _serialize_photo(_require(container, photo_id))


@router.delete("/photos/{photo_id}")
async def remove_photo(photo_id: UUID, request: Request) -> Response:
    _container(request).photo_store.remove(photo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/photos/{photo_id}/confirm")
async def confirm_photo(photo_id: UUID, request: Request) -> dict[str, object]:
    container = _container(request)
    _raise_for(container.photo_store.confirm(photo_id))
    return _serialize_photo(_require(container, photo_id))


@router.post("/photos/{photo_id}/tags")
async def add_tag(
    photo_id: UUID, payload: TagRequest, request: Request
) -> dict[str, object]:
    container = _container(request)
    _raise_for(container.review_controller.add_tag(photo_id, payload.tag))
    return _serialize_photo(_require(container, photo_id))


@router.delete("/photos/{photo_id}/tags/{tag}")
async def remove_tag(photo_id: UUID, tag: str, request: Request) -> dict[str, object]:
    container = _container(request)
    _raise_for(container.review_controller.remove_tag(photo_id, tag))
    return _serialize_photo(_require(container, photo_id))


@router.get("/photos/{photo_id}/preview")
async def photo_preview(photo_id: UUID, request: Request) -> Response:
    """Return the bytes behind a photo's preview handle."""
    container = _container(request)
    photo = _require(container, photo_id)
    file = container.preview_registry.resolve(photo.preview)
    if file is None:
        raise HTTPException(status_code=status.HTTP_410_GONE)
    return Response(content=file.data, media_type=file.mime_type)


@router.post("/confirm-all")
async def confirm_all(request: Request) -> dict[str, object]:
    photo_ids = _container(request).photo_store.confirm_all()
    return {"confirmed": [str(photo_id) for photo_id in photo_ids]}


@router.post("/clear")
async def clear_staged(request: Request) -> dict[str, object]:
    photo_ids = _container(request).photo_store.clear()
    return {"removed": [str(photo_id) for photo_id in photo_ids]}


@router.get("/selection")
async def get_selection(request: Request) -> dict[str, object]:
    selected = _container(request).review_controller.selected()
    return {"selected": sorted(str(photo_id) for photo_id in selected)}


@router.post("/selection/all")
async def select_all(request: Request) -> dict[str, object]:
    controller = _container(request).review_controller
    controller.select_all()
    return {"selected": sorted(str(photo_id) for photo_id in controller.selected())}


@router.delete("/selection")
async def deselect_all(request: Request) -> dict[str, object]:
    _container(request).review_controller.deselect_all()
    return {"selected": []}


@router.post("/selection/{photo_id}")
async def toggle_selection(photo_id: UUID, request: Request) -> dict[str, object]:
    """Flip selection for one photo."""
    selected = _container(request).review_controller.toggle_select(photo_id)
    return {"id": str(photo_id), "selected": selected}


@router.post("/bulk")
async def bulk_apply(payload: BulkApplyRequest, request: Request) -> dict[str, object]:
    """Apply one field to many photos, reporting each failure."""
    result = _container(request).review_controller.bulk_apply(
        payload.field, payload.value, ids=payload.ids
    )
    return {
        "succeeded": [str(photo_id) for photo_id in result.succeeded],
        "failed": [
            {"id": str(failure.photo_id), **_serialize_error(failure.error)}
            for failure in result.failed
        ],
    }


def _require(container: AppContainer, photo_id: UUID) -> StagedPhoto:
    photo = container.photo_store.get(photo_id)
    if photo is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return photo


def _raise_for(result: OperationResult) -> None:
    if result.error is None:
        return
    raise HTTPException(
        status_code=_ERROR_STATUS.get(
            result.error.kind, status.HTTP_400_BAD_REQUEST
        ),
        detail=_serialize_error(result.error),
    )


def _serialize_photo(photo: StagedPhoto) -> dict[str, object]:
    return {
        "id": str(photo.id),
        "name": photo.source.name,
        "mime_type": photo.source.mime_type,
        "size_bytes": photo.source.size_bytes,
        "preview_url": photo.preview.url,
        "title": photo.title,
        "description": photo.description,
        "category": photo.category,
        "tags": list(photo.tags),
        "status": str(photo.status),
        "created_at": photo.created_at.isoformat(),
        "is_complete": photo.is_complete,
    }


def _serialize_error(error: StagingError) -> dict[str, object]:
    return {
        "kind": str(error.kind),
        "message": error.message,
        "file_name": error.file_name,
    }
