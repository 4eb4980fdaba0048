"""Models for metadata patches applied to staged photos."""

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

MAX_TAGS = 10
IMMUTABLE_FIELDS = frozenset({"id", "source", "preview", "created_at", "status"})


def normalize_tag(raw: str) -> str:
    """Trim and lower-case a tag."""
    return raw.strip().lower()


def tag_list_problem(tags: list[str]) -> str | None:
    """Return why a normalized tag list is invalid, or None when it is fine."""
    if any(not tag for tag in tags):
        return "Tags must not be blank"
    seen: set[str] = set()
    for tag in tags:
        if tag in seen:
            return f"Duplicate tag: {tag}"
        seen.add(tag)
    if len(tags) > MAX_TAGS:
        return f"At most {MAX_TAGS} tags are allowed"
    return None


class PhotoPatch(BaseModel):
    """Editable metadata fields; only fields explicitly set are applied."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    description: str | None = None
    category: str | None = None
    tags: list[str] | None = None

    @field_validator("tags")
    @classmethod
    def _check_tags(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        normalized = [normalize_tag(tag) for tag in value]
        problem = tag_list_problem(normalized)
        if problem:
            raise ValueError(problem)
        return normalized

    def changes(self) -> dict[str, object]:
        """Return the set fields in the shape stored on a StagedPhoto."""
        updates: dict[str, object] = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if name == "tags":
                updates[name] = tuple(value or ())
            elif name in {"title", "description"}:
                updates[name] = value or ""
            else:
                updates[name] = value or None
        return updates


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic validation error into one readable line."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        message = error["msg"].removeprefix("Value error, ")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)
