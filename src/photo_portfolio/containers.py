"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from photo_portfolio.adapters.logging_notifier import LoggingNotifier
from photo_portfolio.adapters.object_url_registry import ObjectUrlRegistry
from photo_portfolio.config import Settings
from photo_portfolio.services.notifications import Notifier
from photo_portfolio.services.review import ReviewController
from photo_portfolio.services.staging import StagedPhotoStore
from photo_portfolio.services.upload import UploadService


@dataclass
class AppContainer:
    """Holds session-wide dependencies."""

    settings: Settings
    preview_registry: ObjectUrlRegistry
    photo_store: StagedPhotoStore
    review_controller: ReviewController
    upload_service: UploadService
    notifier: Notifier
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None, notifier: Notifier | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_notifier = notifier or LoggingNotifier()
    preview_registry = ObjectUrlRegistry(prefix=resolved_settings.preview_url_prefix)
    photo_store = StagedPhotoStore(
        config=resolved_settings.staging_config(),
        previews=preview_registry,
    )
    review_controller = ReviewController(photo_store)
    upload_service = UploadService(store=photo_store, notifier=resolved_notifier)

    async def close_resources() -> None:
        photo_store.close()

    return AppContainer(
        settings=resolved_settings,
        preview_registry=preview_registry,
        photo_store=photo_store,
        review_controller=review_controller,
        upload_service=upload_service,
        notifier=resolved_notifier,
        close_resources=close_resources,
    )
