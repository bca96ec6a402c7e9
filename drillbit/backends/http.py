"""Minimal HTTP client shared by the remote backends."""

from __future__ import annotations

import logging
import ssl
from http.client import HTTPException
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from drillbit import __version__
from drillbit.backends.base import BackendError

logger = logging.getLogger(__name__)


class TransportError(BackendError):
    """Network failure or non-2xx response from a remote backend."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message, source=url)


class HttpClient:
    """Blocking HTTP client built on urllib.

    Only successful (2xx) responses are returned; everything else raises
    TransportError.
    """

    DEFAULT_TIMEOUT = 30  # seconds
    USER_AGENT = f"drillbit/{__version__}"

    def __init__(self, timeout: int | None = None):
        """Initialize the client.

        Args:
            timeout: Request timeout in seconds (default: 30)
        """
        self._timeout = timeout or self.DEFAULT_TIMEOUT
        self._ssl_context = ssl.create_default_context()

    def get(self, url: str, headers: dict[str, str] | None = None) -> bytes:
        """Make a GET request.

        Args:
            url: URL to request
            headers: Extra request headers

        Returns:
            Response body as bytes

        Raises:
            TransportError: If the request fails or the status is not 2xx
        """
        logger.debug("Making GET request to %s", url)
        try:
            request = Request(url, method="GET")
            request.add_header("User-Agent", self.USER_AGENT)
            for key, value in (headers or {}).items():
                request.add_header(key, value)

            with urlopen(request, timeout=self._timeout, context=self._ssl_context) as response:
                status: int = response.status
                if not 200 <= status < 300:
                    raise TransportError(
                        f"Request failed with status: {status} for {url}",
                        url=url,
                        status_code=status,
                    )
                result: bytes = response.read()
                logger.debug("Request successful, received %d bytes", len(result))
                return result
        except HTTPError as e:
            logger.error("HTTP error %d: %s for %s", e.code, e.reason, url)
            raise TransportError(
                f"Request failed with status: {e.code} {e.reason} for {url}",
                url=url,
                status_code=e.code,
            ) from e
        except URLError as e:
            logger.error("Failed to connect to %s: %s", url, e.reason)
            raise TransportError(f"Failed to connect to {url}: {e.reason}", url=url) from e
        except TimeoutError as e:
            logger.error("Request timed out for %s", url)
            raise TransportError(f"Request timed out for {url}", url=url) from e
        except (OSError, HTTPException) as e:
            logger.error("Connection to %s failed: %s", url, e)
            raise TransportError(f"Connection to {url} failed: {e}", url=url) from e
        except ValueError as e:
            raise TransportError(f"Invalid URL {url}: {e}", url=url) from e
