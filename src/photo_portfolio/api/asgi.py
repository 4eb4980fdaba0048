"""ASGI entrypoint for the photo portfolio staging API."""

from photo_portfolio.api.app import create_app
from photo_portfolio.containers import build_container

app = create_app(build_container())
