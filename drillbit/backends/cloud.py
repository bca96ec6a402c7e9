"""Backend for assets hosted on Roblox, fetched through the asset delivery API."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from pydantic import BaseModel, ValidationError

from drillbit.auth.cookie import get_cookie
from drillbit.backends import register_backend
from drillbit.backends.base import Backend, FetchedAsset
from drillbit.backends.http import HttpClient, TransportError
from drillbit.config.schemas import CloudSource, PluginSource, SourceKind

logger = logging.getLogger(__name__)

ASSET_DELIVERY_URL = "https://assetdelivery.roblox.com/v2/asset?id={id}"


class AssetLocation(BaseModel):
    """One download location for an asset."""

    location: str


class AssetResponse(BaseModel):
    """Body of an asset delivery metadata response."""

    locations: list[AssetLocation]


@register_backend("cloud")
class CloudBackend(Backend):
    """Downloads Roblox assets by id using the user's session cookie.

    The cookie is looked up on the first download and reused for every
    later plugin in the run.
    """

    def __init__(
        self,
        project_root: Path,
        http_client: HttpClient | None = None,
        cookie_provider: Callable[[], str] | None = None,
    ):
        super().__init__(project_root, http_client or HttpClient())
        self._cookie_provider = cookie_provider or get_cookie
        self._cookie: str | None = None

    @property
    def kind(self) -> SourceKind:
        return "cloud"

    def _get_cookie(self) -> str:
        if self._cookie is None:
            self._cookie = self._cookie_provider()
        return self._cookie

    def _resolve_location(self, asset_id: int, cookie: str) -> str:
        url = ASSET_DELIVERY_URL.format(id=asset_id)
        content = self._http_client.get(url, headers={"Cookie": cookie})

        try:
            asset = AssetResponse.model_validate_json(content)
        except ValidationError as e:
            raise TransportError(f"Invalid asset response for {asset_id}: {e}", url=url) from e

        if not asset.locations:
            raise TransportError(f"No download locations found for asset {asset_id}", url=url)

        return asset.locations[0].location

    def download(self, source: PluginSource) -> FetchedAsset:
        self._check_source(source)
        assert isinstance(source, CloudSource)

        cookie = self._get_cookie()
        location = self._resolve_location(source.cloud, cookie)
        logger.debug("Asset %d resolved to %s", source.cloud, location)

        data = self._http_client.get(location, headers={"Cookie": cookie})
        return FetchedAsset(data=data, extension="rbxm")

    def plugin_id(self, source: PluginSource, key: str, project_name: str) -> str:
        self._check_source(source)
        assert isinstance(source, CloudSource)
        return f"{project_name}_{key}_{source.cloud}"
