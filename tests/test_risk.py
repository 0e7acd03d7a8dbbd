"""Tests for analysis/risk.py — the 0–100 risk score."""

import itertools

from dep_inspector.analysis.dependencies import build_package_info
from dep_inspector.analysis.risk import compute_risk_score
from dep_inspector.models import Vulnerability


def _vuln(severity, name="pkg"):
    return Vulnerability(
        package_name=name, severity=severity, title="t", url="https://example.com"
    )


class TestComputeRiskScore:
    def test_empty_is_perfect(self):
        assert compute_risk_score([], []) == 100

    def test_one_critical(self):
        assert compute_risk_score([], [_vuln("critical")]) == 80

    def test_severity_penalties(self):
        assert compute_risk_score([], [_vuln("high")]) == 90
        assert compute_risk_score([], [_vuln("moderate")]) == 95
        assert compute_risk_score([], [_vuln("low")]) == 98

    def test_unknown_severity_scored_as_low(self):
        assert compute_risk_score([], [_vuln("info")]) == 98

    def test_one_major_package(self):
        pkg = build_package_info("a", "^1.0.0", "2.0.0")
        assert compute_risk_score([pkg], []) == 95

    def test_diff_penalties(self):
        packages = [
            build_package_info("a", "1.0.0", "1.1.0"),  # minor
            build_package_info("b", "1.0.0", "1.0.1"),  # patch
            build_package_info("c", "1.0.0", "1.0.0"),  # up to date
        ]
        assert compute_risk_score(packages, []) == 97

    def test_clamped_at_zero(self):
        assert compute_risk_score([], [_vuln("critical")] * 10) == 0

    def test_permutation_invariant(self):
        packages = [
            build_package_info("a", "1.0.0", "2.0.0"),
            build_package_info("b", "1.0.0", "1.1.0"),
            build_package_info("c", "1.0.0", "1.0.1"),
        ]
        vulns = [_vuln("critical"), _vuln("moderate"), _vuln("low")]
        expected = compute_risk_score(packages, vulns)
        for p_order in itertools.permutations(packages):
            for v_order in itertools.permutations(vulns):
                assert compute_risk_score(list(p_order), list(v_order)) == expected
