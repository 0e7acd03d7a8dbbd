"""Tests for analysis/summary.py — prompt building and reply parsing."""

from dep_inspector.analysis.dependencies import build_package_info
from dep_inspector.analysis.summary import build_summary_prompt, parse_summary_text
from dep_inspector.models import (
    DependencyAnalysisResult,
    RepoContext,
    RepoInfo,
    Vulnerability,
)


def _context(**kwargs):
    return RepoContext(
        info=RepoInfo(full_name="owner/repo", description="Demo", language="TypeScript"),
        tree=["package.json", "src/index.ts"],
        readme="# Demo",
        **kwargs,
    )


class TestBuildSummaryPrompt:
    def test_includes_repo_and_dependency_facts(self):
        deps = DependencyAnalysisResult(
            packages=(
                build_package_info("react", "^17.0.0", "18.2.0"),
                build_package_info("lodash", "4.17.21", "4.17.21"),
            ),
            vulnerabilities=(
                Vulnerability(
                    package_name="react", severity="high", title="XSS", url="https://x"
                ),
            ),
            risk_score=85,
        )
        prompt = build_summary_prompt(_context(), deps)

        assert "owner/repo" in prompt
        assert "Risk Score: 85/100" in prompt
        assert "Total packages: 2" in prompt
        assert "Outdated packages: 1" in prompt
        assert "react (17.0.0 → 18.2.0)" in prompt
        assert "- [high] react: XSS" in prompt
        assert "## Risk Assessment" in prompt

    def test_without_dependency_analysis(self):
        prompt = build_summary_prompt(_context(), None)
        assert "Risk Score: N/A/100" in prompt
        assert "No vulnerabilities detected." in prompt

    def test_tree_is_limited(self):
        ctx = RepoContext(info=RepoInfo(full_name="o/r"), tree=[f"f{i}" for i in range(80)])
        prompt = build_summary_prompt(ctx, None)
        assert "f49" in prompt
        assert "f50" not in prompt


class TestParseSummaryText:
    def test_three_sections(self):
        text = (
            "## Overview\nA web framework.\n\n"
            "## Dependency Summary\nMostly current.\n\n"
            "## Risk Assessment\nLow risk.\n"
        )
        summary = parse_summary_text(text)
        assert summary.overview == "A web framework."
        assert summary.dependency_summary == "Mostly current."
        assert summary.risk_summary == "Low risk."

    def test_missing_sections_are_empty(self):
        summary = parse_summary_text("## Overview\nOnly this.")
        assert summary.overview == "Only this."
        assert summary.dependency_summary == ""
        assert summary.risk_summary == ""

    def test_unstructured_reply(self):
        summary = parse_summary_text("I cannot help with that.")
        assert summary.overview == ""
