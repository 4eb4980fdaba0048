"""Validation rules for candidate photo files."""

from collections.abc import Sequence

from photo_portfolio.domain.photos import PhotoFile
from photo_portfolio.domain.staging import (
    BatchValidation,
    ErrorKind,
    FileVerdict,
    StagingConfig,
    StagingError,
)


def validate_file(
    file: PhotoFile, accepted: Sequence[PhotoFile], config: StagingConfig
) -> FileVerdict:
    """Decide whether a file may be staged alongside already accepted files."""
    category = file.mime_type.split("/", 1)[0].strip().lower()
    if not category or category not in config.accepted_categories:
        return _reject(
            ErrorKind.INVALID_FORMAT,
            f"{file.name} is not a valid image format",
            file,
        )
    if file.size_bytes > config.max_size_bytes:
        return _reject(
            ErrorKind.TOO_LARGE,
            f"{file.name} exceeds {config.max_size_label} size limit",
            file,
        )
    if any(
        other.name == file.name and other.size_bytes == file.size_bytes
        for other in accepted
    ):
        return _reject(ErrorKind.DUPLICATE, f"{file.name} is a duplicate", file)
    return FileVerdict(accepted=True)


def validate_batch(
    files: Sequence[PhotoFile], config: StagingConfig
) -> BatchValidation:
    """Split a batch into valid files and errors, judging every file."""
    if len(files) > config.max_files:
        return BatchValidation(
            valid_files=[],
            errors=[
                StagingError(
                    kind=ErrorKind.TOO_MANY,
                    message=(
                        f"Maximum {config.max_files} files allowed. "
                        f"You selected {len(files)} files."
                    ),
                )
            ],
        )

    valid_files: list[PhotoFile] = []
    errors: list[StagingError] = []
    for file in files:
        verdict = validate_file(file, valid_files, config)
        if verdict.accepted:
            valid_files.append(file)
        elif verdict.reason is not None:
            errors.append(verdict.reason)
    return BatchValidation(valid_files=valid_files, errors=errors)


def _reject(kind: ErrorKind, message: str, file: PhotoFile) -> FileVerdict:
    return FileVerdict(
        accepted=False,
        reason=StagingError(kind=kind, message=message, file_name=file.name),
    )
