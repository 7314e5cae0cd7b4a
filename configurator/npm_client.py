"""Async client for the npm registry.

Supplies the default version lookup for ``package.json`` generation:
``GET /<package>/latest`` returns the manifest of the latest release, whose
``version`` is turned into a caret range.

Typical usage::

    client = NpmClient()
    version = await client.get_version("react")   # "^18.3.1"
"""

from __future__ import annotations

from urllib.parse import quote

import httpx

from configurator.composer.errors import VersionLookupError


class NpmClient:
    """Async client for the npm registry REST API.

    Every lookup failure (connection, timeout, HTTP status, malformed body)
    is raised as ``VersionLookupError`` so a single bad package aborts the
    whole resolution.
    """

    def __init__(
        self,
        base_url: str = "https://registry.npmjs.org",
        timeout: float = 30.0,
        range_prefix: str = "^",
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.range_prefix = range_prefix

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` configured with our base URL and timeout."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=10.0),
        )

    @staticmethod
    def _package_path(name: str) -> str:
        """Encode *name* for the registry URL (``@types/react`` -> ``@types%2Freact``)."""
        return "/" + quote(name, safe="@")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_latest(self, name: str) -> str:
        """Return the bare latest version of *name* (e.g. ``"18.3.1"``)."""
        try:
            async with self._client() as client:
                response = await client.get(f"{self._package_path(name)}/latest")
                response.raise_for_status()
                data = response.json()
        except httpx.ConnectError as exc:
            raise VersionLookupError(
                name, f"cannot connect to registry at {self.base_url}"
            ) from exc
        except httpx.TimeoutException as exc:
            raise VersionLookupError(
                name, f"registry request timed out after {self.timeout}s"
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise VersionLookupError(
                name, f"registry returned HTTP {exc.response.status_code}"
            ) from exc
        except ValueError as exc:
            raise VersionLookupError(name, "registry returned invalid JSON") from exc

        version = data.get("version") if isinstance(data, dict) else None
        if not version:
            raise VersionLookupError(name, "registry response has no version")
        return version

    async def get_version(self, name: str) -> str:
        """Return the version range to pin *name* at (e.g. ``"^18.3.1"``)."""
        return f"{self.range_prefix}{await self.get_latest(name)}"

    async def is_available(self) -> bool:
        """Return ``True`` if the registry answers at all."""
        try:
            async with self._client() as client:
                response = await client.get("/")
                return response.status_code == 200
        except httpx.HTTPError:
            return False
