"""Pytest configuration and fixtures."""

import pytest

from dep_inspector.models import AdvisoryRecord, PackageMetadata
from dep_inspector.registry import LookupFailed


@pytest.fixture(scope="session")
def anyio_backend():
    """Configure anyio backend for async tests."""
    return "asyncio"


class FakeRegistry:
    """In-memory stand-in for both registry lookups.

    ``latest`` maps package name to (version, license); names missing from it
    fail. ``advisories`` is returned as-is unless ``advisories_fail`` is set.
    """

    def __init__(self, latest=None, advisories=None, advisories_fail=False):
        self.latest = latest or {}
        self.advisories = advisories or {}
        self.advisories_fail = advisories_fail
        self.metadata_calls: list[str] = []
        self.advisory_batches: list[dict] = []

    async def fetch_package_metadata(self, name):
        self.metadata_calls.append(name)
        if name not in self.latest:
            raise LookupFailed(f"Failed to fetch {name}")
        version, license = self.latest[name]
        return PackageMetadata(latest_version=version, license=license)

    async def fetch_advisories(self, batch):
        self.advisory_batches.append(batch)
        if self.advisories_fail:
            raise LookupFailed("Advisory lookup failed: 503")
        return {
            name: [AdvisoryRecord(**a) for a in records]
            for name, records in self.advisories.items()
        }


@pytest.fixture
def sample_manifest():
    return {
        "name": "demo",
        "dependencies": {"pkg-a": "^1.0.0"},
        "devDependencies": {"pkg-b": "~2.1.0"},
    }


@pytest.fixture
def fake_registry():
    return FakeRegistry(
        latest={"pkg-a": ("1.2.0", "MIT"), "pkg-b": ("2.1.0", None)},
        advisories={
            "pkg-a": [
                {
                    "severity": "high",
                    "title": "Prototype pollution",
                    "url": "https://github.com/advisories/GHSA-xxxx",
                }
            ]
        },
    )


@pytest.fixture
def make_registry():
    return FakeRegistry
