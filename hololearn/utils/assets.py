"""Model asset loader with local mode support."""

from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import httpx
import structlog

from hololearn.config import Settings

logger = structlog.get_logger()


class AssetLoader:
    """Fetches glTF model assets from the CDN, or from disk in local mode."""

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        """Initialize the loader with settings."""
        self.settings = settings
        self.local_mode = settings.local_mode
        self._client = client

    async def fetch(self, url: str) -> bytes:
        """Return the asset bytes for a model URL."""
        if self.local_mode:
            return await self._read_local_asset(url)
        return await self._download_asset(url)

    def local_path_for(self, url: str) -> Path:
        """Map an asset URL to its file under the local models directory."""
        filename = Path(urlparse(url).path).name
        return Path(self.settings.local_models_path) / filename

    async def _read_local_asset(self, url: str) -> bytes:
        """Read an asset from the local models directory."""
        asset_path = self.local_path_for(url)
        try:
            data = asset_path.read_bytes()
        except FileNotFoundError:
            logger.error("local_asset_not_found", path=str(asset_path))
            raise
        logger.debug("local_asset_loaded", path=str(asset_path), size=len(data))
        return data

    async def _download_asset(self, url: str) -> bytes:
        """Download an asset over HTTP."""
        if self._client is not None:
            response = await self._client.get(url, timeout=self.settings.asset_timeout_seconds)
        else:
            async with httpx.AsyncClient(follow_redirects=True) as client:
                response = await client.get(url, timeout=self.settings.asset_timeout_seconds)

        if response.status_code != 200:
            logger.error("asset_download_error", url=url, status=response.status_code)
            raise httpx.HTTPStatusError(
                f"Asset download failed with status {response.status_code}",
                request=response.request,
                response=response,
            )

        logger.debug("asset_downloaded", url=url, size=len(response.content))
        return response.content
