"""Tests for container wiring."""

import asyncio

from photo_portfolio.adapters.logging_notifier import LoggingNotifier
from photo_portfolio.containers import build_container


def test_build_container_shares_one_store(settings) -> None:
    container = build_container(settings)

    assert container.review_controller.store is container.photo_store
    assert container.upload_service.store is container.photo_store
    assert container.photo_store.previews is container.preview_registry
    assert isinstance(container.notifier, LoggingNotifier)
    assert container.photo_store.config.max_files == settings.max_files


def test_close_resources_releases_previews(settings, make_file) -> None:
    container = build_container(settings)
    asyncio.run(container.photo_store.stage([make_file()]))

    asyncio.run(container.close_resources())

    assert container.photo_store.closed
    assert container.preview_registry.live_count == 0
