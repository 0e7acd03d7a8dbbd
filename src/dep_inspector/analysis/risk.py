"""Fold version lag and advisories into a 0–100 risk score."""

from collections.abc import Iterable

from dep_inspector.models import PackageInfo, Severity, VersionDiff, Vulnerability

BASE_SCORE = 100

SEVERITY_PENALTIES: dict[str, int] = {
    Severity.critical.value: 20,
    Severity.high.value: 10,
    Severity.moderate.value: 5,
    Severity.low.value: 2,
}
DEFAULT_SEVERITY_PENALTY = 2

DIFF_PENALTIES: dict[VersionDiff, int] = {
    VersionDiff.major: 5,
    VersionDiff.minor: 2,
    VersionDiff.patch: 1,
    VersionDiff.up_to_date: 0,
}


def severity_penalty(severity: str) -> int:
    """Points lost for one advisory; unrecognised tiers cost as much as low."""
    return SEVERITY_PENALTIES.get(severity, DEFAULT_SEVERITY_PENALTY)


def compute_risk_score(
    packages: Iterable[PackageInfo],
    vulnerabilities: Iterable[Vulnerability],
) -> int:
    """Start from 100, subtract a fixed penalty per advisory and per outdated
    package, and clamp to [0, 100]."""
    penalty = sum(severity_penalty(v.severity) for v in vulnerabilities)
    penalty += sum(DIFF_PENALTIES[p.version_diff] for p in packages)
    return max(0, min(BASE_SCORE, BASE_SCORE - penalty))
