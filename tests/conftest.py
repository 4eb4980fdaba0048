"""Shared test fixtures."""

import asyncio
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

import pytest

from photo_portfolio.adapters.object_url_registry import ObjectUrlRegistry
from photo_portfolio.config import Settings
from photo_portfolio.containers import AppContainer, build_container
from photo_portfolio.domain.photos import PhotoFile
from photo_portfolio.domain.staging import BYTES_PER_MB, StageResult, StagingConfig
from photo_portfolio.services.notifications import NotificationKind, Notifier
from photo_portfolio.services.review import ReviewController
from photo_portfolio.services.staging import StagedPhotoStore
from photo_portfolio.services.upload import UploadService


@dataclass
class RecordingNotifier(Notifier):
    """Notifier that keeps every message for assertions."""

    messages: list[tuple[NotificationKind, str]] = field(default_factory=list)

    def notify(self, kind: NotificationKind, message: str) -> None:
        self.messages.append((kind, message))


def _make_file(
    name: str = "photo.jpg",
    mime_type: str = "image/jpeg",
    size_bytes: int = 1024,
    data: bytes = b"\xff\xd8\xff-fake-jpeg",
) -> PhotoFile:
    return PhotoFile(name=name, mime_type=mime_type, size_bytes=size_bytes, data=data)


@pytest.fixture
def make_file() -> Callable[..., PhotoFile]:
    return _make_file


@pytest.fixture
def settings() -> Settings:
    return Settings(
        max_files=50,
        max_size_mb=10,
        accepted_formats="image/jpeg,image/png,image/gif,image/webp",
        preview_url_prefix="blob:test",
    )


@pytest.fixture
def staging_config() -> StagingConfig:
    return StagingConfig(max_files=5, max_size_bytes=10 * BYTES_PER_MB)


@pytest.fixture
def preview_registry() -> ObjectUrlRegistry:
    return ObjectUrlRegistry(prefix="blob:test")


@pytest.fixture
def store(
    staging_config: StagingConfig, preview_registry: ObjectUrlRegistry
) -> StagedPhotoStore:
    return StagedPhotoStore(config=staging_config, previews=preview_registry)


@pytest.fixture
def controller(store: StagedPhotoStore) -> ReviewController:
    return ReviewController(store)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def upload_service(
    store: StagedPhotoStore, notifier: RecordingNotifier
) -> UploadService:
    return UploadService(store=store, notifier=notifier)


@pytest.fixture
def stage(store: StagedPhotoStore) -> Callable[[Iterable[PhotoFile]], StageResult]:
    """Run ``store.stage`` to completion from synchronous tests."""

    def _stage(files: Iterable[PhotoFile]) -> StageResult:
        return asyncio.run(store.stage(files))

    return _stage


@pytest.fixture
def container(settings: Settings, notifier: RecordingNotifier) -> AppContainer:
    return build_container(settings, notifier=notifier)
