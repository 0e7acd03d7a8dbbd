"""Dependency risk analysis: version lag, advisories and the risk score."""

import asyncio
from typing import Optional, Union

import structlog

from dep_inspector.analysis.risk import compute_risk_score
from dep_inspector.analysis.versions import classify_version_diff, strip_range_prefix
from dep_inspector.models import (
    DependencyAnalysisResult,
    PackageInfo,
    PackageJson,
    VersionDiff,
    Vulnerability,
)
from dep_inspector.registry import AdvisoryLookup, PackageMetadataLookup

log = structlog.get_logger("dep_inspector.analysis")


def build_package_info(
    name: str, declared: str, latest: str, license: Optional[str] = None
) -> PackageInfo:
    """Compare a declared range against the latest release."""
    current = strip_range_prefix(declared)
    diff = classify_version_diff(current, latest)
    return PackageInfo(
        name=name,
        current_version=current,
        latest_version=latest,
        is_outdated=diff is not VersionDiff.up_to_date,
        version_diff=diff,
        license=license,
    )


class DependencyAnalyzer:
    """Resolves every direct dependency against the registry and scores them.

    Lookups are best-effort: a package whose metadata cannot be fetched is
    left out of the result along with its advisories, and a failed advisory
    lookup means no vulnerabilities are reported. Neither failure reaches the caller.
    """

    def __init__(
        self,
        metadata_lookup: PackageMetadataLookup,
        advisory_lookup: AdvisoryLookup,
    ) -> None:
        self._metadata = metadata_lookup
        self._advisories = advisory_lookup

    async def analyze(
        self, manifest: Union[PackageJson, dict, None]
    ) -> DependencyAnalysisResult:
        if manifest is None:
            raise ValueError("A package.json manifest is required")
        if not isinstance(manifest, PackageJson):
            manifest = PackageJson.model_validate(manifest)

        deps = manifest.merged_dependencies()
        packages, vulnerabilities = await asyncio.gather(
            self._resolve_packages(deps),
            self._collect_vulnerabilities(deps),
        )
        # Advisories for packages that failed to resolve are dropped with them.
        resolved = {p.name for p in packages}
        vulnerabilities = [v for v in vulnerabilities if v.package_name in resolved]
        return DependencyAnalysisResult(
            packages=tuple(packages),
            vulnerabilities=tuple(vulnerabilities),
            risk_score=compute_risk_score(packages, vulnerabilities),
        )

    # ── Package metadata fan-out ──────────────────────────────────────────

    async def _resolve_one(self, name: str, declared: str) -> PackageInfo:
        meta = await self._metadata.fetch_package_metadata(name)
        return build_package_info(name, declared, meta.latest_version, meta.license)

    async def _resolve_packages(self, deps: dict[str, str]) -> list[PackageInfo]:
        names = list(deps)
        results = await asyncio.gather(
            *(self._resolve_one(name, deps[name]) for name in names),
            return_exceptions=True,
        )
        packages: list[PackageInfo] = []
        for name, outcome in zip(names, results):
            if isinstance(outcome, BaseException):
                log.info(
                    "registry.metadata_lookup_failed",
                    package=name,
                    error=str(outcome),
                )
                continue
            packages.append(outcome)
        return packages

    # ── Advisories ────────────────────────────────────────────────────────

    async def _collect_vulnerabilities(
        self, deps: dict[str, str]
    ) -> list[Vulnerability]:
        batch = {name: [strip_range_prefix(declared)] for name, declared in deps.items()}
        try:
            advisories = await self._advisories.fetch_advisories(batch)
        except Exception as e:
            log.warning("registry.advisory_lookup_failed", error=str(e))
            return []

        return [
            Vulnerability(
                package_name=package_name,
                severity=a.severity,
                title=a.title,
                url=a.url,
            )
            for package_name, records in advisories.items()
            for a in records
        ]
