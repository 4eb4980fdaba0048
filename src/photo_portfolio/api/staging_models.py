"""Request models for the staging API."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel


class TagRequest(BaseModel):
    tag: str


class BulkApplyRequest(BaseModel):
    """Apply one field value to the selected photos or to explicit ids."""

    field: str
    value: Any
    ids: list[UUID] | None = None
