"""Upload flow: stage selected files and tell the user what happened."""

from collections.abc import Sequence
from dataclasses import dataclass

from photo_portfolio.domain.photos import PhotoFile
from photo_portfolio.domain.staging import StageResult, StagingError
from photo_portfolio.services.notifications import NotificationKind, Notifier
from photo_portfolio.services.staging import StagedPhotoStore

SUMMARY_ERROR_LIMIT = 3


@dataclass
class UploadService:
    """Application service behind the upload screen."""

    store: StagedPhotoStore
    notifier: Notifier

    async def add_files(self, files: Sequence[PhotoFile]) -> StageResult:
        """Stage files and notify about accepted and rejected ones."""
        if not files:
            self.notifier.notify(
                NotificationKind.ERROR, "No files detected. Please try again."
            )
            return StageResult(created=[], errors=[])

        result = await self.store.stage(files)
        if result.errors:
            if result.created:
                message = summarize_errors(result.errors)
            else:
                message = f"No valid files to upload. {result.errors[0].message}"
            self.notifier.notify(NotificationKind.ERROR, message)
        if result.created:
            count = len(result.created)
            noun = "photo" if count == 1 else "photos"
            self.notifier.notify(
                NotificationKind.SUCCESS, f"Added {count} {noun} for review"
            )
        return result


def summarize_errors(errors: Sequence[StagingError]) -> str:
    """Join the first few error messages, counting the rest."""
    shown = ", ".join(error.message for error in errors[:SUMMARY_ERROR_LIMIT])
    hidden = len(errors) - SUMMARY_ERROR_LIMIT
    if hidden > 0:
        return f"{shown} ...and {hidden} more"
    return shown
