"""Tests for drillbit.backends.cloud module."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from drillbit.auth.cookie import AuthError
from drillbit.backends.cloud import ASSET_DELIVERY_URL, CloudBackend
from drillbit.backends.http import HttpClient, TransportError
from drillbit.config.schemas import CloudSource, LocalSource

COOKIE = ".ROBLOSECURITY=secret"
LOCATION = "https://c0.rbxcdn.com/abc123"


def metadata(*locations: str) -> bytes:
    return json.dumps({"locations": [{"location": loc} for loc in locations]}).encode()


@pytest.fixture
def client() -> MagicMock:
    """Get a mocked HTTP client."""
    return MagicMock(spec=HttpClient)


@pytest.fixture
def cookie_provider() -> MagicMock:
    """Get a cookie provider returning a fixed cookie."""
    return MagicMock(return_value=COOKIE)


@pytest.fixture
def backend(temp_project: Path, client: MagicMock, cookie_provider: MagicMock) -> CloudBackend:
    """Get a CloudBackend with mocked network and credentials."""
    return CloudBackend(temp_project, client, cookie_provider=cookie_provider)


class TestCloudBackendDownload:
    """Tests for CloudBackend.download()."""

    def test_resolves_then_downloads(self, backend: CloudBackend, client: MagicMock):
        """Resolves the asset location, then fetches it with the cookie."""
        client.get.side_effect = [metadata(LOCATION, "https://other"), b"asset-bytes"]

        asset = backend.download(CloudSource(cloud=12345))

        assert asset.data == b"asset-bytes"
        assert asset.extension == "rbxm"
        first, second = client.get.call_args_list
        assert first.args[0] == ASSET_DELIVERY_URL.format(id=12345)
        assert first.kwargs["headers"] == {"Cookie": COOKIE}
        assert second.args[0] == LOCATION
        assert second.kwargs["headers"] == {"Cookie": COOKIE}

    def test_cookie_is_fetched_once(
        self, backend: CloudBackend, client: MagicMock, cookie_provider: MagicMock
    ):
        """The session cookie is cached across downloads."""
        client.get.side_effect = [metadata(LOCATION), b"a", metadata(LOCATION), b"b"]

        backend.download(CloudSource(cloud=1))
        backend.download(CloudSource(cloud=2))

        cookie_provider.assert_called_once()

    def test_cookie_is_lazy(self, cookie_provider: MagicMock, temp_project: Path):
        """Creating the backend does not look up the cookie."""
        CloudBackend(temp_project, MagicMock(spec=HttpClient), cookie_provider=cookie_provider)

        cookie_provider.assert_not_called()

    def test_auth_failure_propagates(self, temp_project: Path, client: MagicMock):
        """A missing cookie aborts before any request is made."""
        provider = MagicMock(side_effect=AuthError("Couldn't get Roblox cookie"))
        backend = CloudBackend(temp_project, client, cookie_provider=provider)

        with pytest.raises(AuthError):
            backend.download(CloudSource(cloud=1))
        client.get.assert_not_called()

    def test_no_locations(self, backend: CloudBackend, client: MagicMock):
        """An empty locations list is an error."""
        client.get.return_value = metadata()

        with pytest.raises(TransportError, match="No download locations found"):
            backend.download(CloudSource(cloud=12345))
        assert client.get.call_count == 1

    def test_missing_locations_field(self, backend: CloudBackend, client: MagicMock):
        """A response without locations is an error."""
        client.get.return_value = b'{"errors": []}'

        with pytest.raises(TransportError, match="Invalid asset response"):
            backend.download(CloudSource(cloud=12345))

    def test_metadata_status_error(self, backend: CloudBackend, client: MagicMock):
        """A non-2xx metadata response propagates its status."""
        client.get.side_effect = TransportError("Request failed", status_code=403)

        with pytest.raises(TransportError) as exc_info:
            backend.download(CloudSource(cloud=12345))
        assert exc_info.value.status_code == 403

    def test_download_status_error(self, backend: CloudBackend, client: MagicMock):
        """A non-2xx content response propagates its status."""
        client.get.side_effect = [
            metadata(LOCATION),
            TransportError("Request failed", url=LOCATION, status_code=500),
        ]

        with pytest.raises(TransportError) as exc_info:
            backend.download(CloudSource(cloud=12345))
        assert exc_info.value.status_code == 500

    def test_rejects_other_source_kinds(self, backend: CloudBackend):
        """Only cloud sources are handled."""
        with pytest.raises(TypeError):
            backend.download(LocalSource(local="x.rbxm"))


class TestCloudBackendPluginId:
    """Tests for CloudBackend.plugin_id()."""

    def test_includes_key_and_id(self, backend: CloudBackend):
        """The id is scoped by project name and includes key and asset id."""
        assert backend.plugin_id(CloudSource(cloud=12345), "c", "my-game") == "my-game_c_12345"

    def test_differs_per_project(self, backend: CloudBackend):
        """The same asset installed from two projects gets two ids."""
        source = CloudSource(cloud=7)

        assert backend.plugin_id(source, "k", "one") != backend.plugin_id(source, "k", "two")
