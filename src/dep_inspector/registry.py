"""npm registry access: latest-version metadata and bulk advisories."""

import os
from typing import Optional, Protocol
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter

from dep_inspector.models import AdvisoryRecord, PackageMetadata

NPM_REGISTRY_URL = "https://registry.npmjs.org"
ADVISORIES_PATH = "/-/npm/v1/security/advisories/bulk"

_advisory_payload = TypeAdapter(dict[str, list[AdvisoryRecord]])


class LookupFailed(Exception):
    """A registry lookup could not produce a usable answer."""


class PackageMetadataLookup(Protocol):
    async def fetch_package_metadata(self, name: str) -> PackageMetadata: ...


class AdvisoryLookup(Protocol):
    async def fetch_advisories(
        self, batch: dict[str, list[str]]
    ) -> dict[str, list[AdvisoryRecord]]: ...


def _license_name(raw: object) -> Optional[str]:
    """``license`` is usually an SPDX string; very old packages use an object."""
    if isinstance(raw, str):
        return raw
    if isinstance(raw, dict) and isinstance(raw.get("type"), str):
        return raw["type"]
    return None


class NpmRegistry:
    """Talks to the npm registry over a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = (
            base_url or os.environ.get("NPM_REGISTRY_URL") or NPM_REGISTRY_URL
        ).rstrip("/")
        self._client = client
        self._owns_client = client is None

    async def _client_instance(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"Accept": "application/json"},
                timeout=30.0,
            )
        return self._client

    async def close(self) -> None:
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    # ── Package metadata ──────────────────────────────────────────────────

    async def fetch_package_metadata(self, name: str) -> PackageMetadata:
        """Fetch the latest published version and license of ``name``."""
        client = await self._client_instance()
        url = f"{self.base_url}/{quote(name, safe='')}/latest"
        try:
            resp = await client.get(url)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise LookupFailed(f"Failed to fetch {name}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("version"), str):
            raise LookupFailed(f"Malformed metadata for {name}")
        return PackageMetadata(
            latest_version=data["version"],
            license=_license_name(data.get("license")),
        )

    # ── Advisories ────────────────────────────────────────────────────────

    async def fetch_advisories(
        self, batch: dict[str, list[str]]
    ) -> dict[str, list[AdvisoryRecord]]:
        """Look up advisories for every ``name -> [versions]`` pair at once."""
        client = await self._client_instance()
        try:
            resp = await client.post(f"{self.base_url}{ADVISORIES_PATH}", json=batch)
            resp.raise_for_status()
            return _advisory_payload.validate_python(resp.json())
        except (httpx.HTTPError, ValueError) as e:
            raise LookupFailed(f"Advisory lookup failed: {e}") from e
