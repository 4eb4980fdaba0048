"""In-memory object URL registry for photo previews."""

from dataclasses import dataclass, field
from uuid import uuid4

from photo_portfolio.domain.photos import PhotoFile, PreviewHandle
from photo_portfolio.domain.staging import StoreInvariantError
from photo_portfolio.services.staging import PreviewFactory


@dataclass
class ObjectUrlRegistry(PreviewFactory):
    """Issues ``blob:`` URLs that resolve to file payloads until revoked."""

    prefix: str = "blob:photo-portfolio"
    _live: dict[str, PhotoFile] = field(default_factory=dict, init=False, repr=False)

    async def create(self, file: PhotoFile) -> PreviewHandle:
        """Register a file and return a fresh handle for it."""
        url = f"{self.prefix}/{uuid4()}"
        self._live[url] = file
        return PreviewHandle(url=url)

    def revoke(self, handle: PreviewHandle) -> None:
        """Release a handle. Revoking a handle twice is a bug."""
        if self._live.pop(handle.url, None) is None:
            raise StoreInvariantError(f"Preview {handle.url} is not live")

    def resolve(self, handle: PreviewHandle) -> PhotoFile | None:
        """Return the file behind a live handle."""
        return self._live.get(handle.url)

    @property
    def live_count(self) -> int:
        return len(self._live)
