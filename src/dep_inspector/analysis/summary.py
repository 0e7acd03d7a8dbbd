"""Summary prompt construction and parsing of the LLM's sectioned reply."""

import re
from typing import Optional

from dep_inspector.models import (
    DependencyAnalysisResult,
    RepoContext,
    Summary,
    VersionDiff,
)

_OVERVIEW = re.compile(r"## Overview\n(.*?)(?=## Dependency Summary|\Z)", re.S)
_DEPENDENCIES = re.compile(r"## Dependency Summary\n(.*?)(?=## Risk Assessment|\Z)", re.S)
_RISK = re.compile(r"## Risk Assessment\n(.*)\Z", re.S)


def build_summary_prompt(
    context: RepoContext, deps: Optional[DependencyAnalysisResult]
) -> str:
    """Assemble the prompt asking for a three-section repository summary."""
    info = context.info
    outdated = deps.outdated if deps else []
    if deps and deps.vulnerabilities:
        vuln_text = "\n".join(
            f"- [{v.severity}] {v.package_name}: {v.title}"
            for v in deps.vulnerabilities
        )
    else:
        vuln_text = "No vulnerabilities detected."

    major_line = ""
    if outdated:
        major = ", ".join(
            f"{p.name} ({p.current_version} → {p.latest_version})"
            for p in outdated
            if p.version_diff is VersionDiff.major
        )
        major_line = f"Major outdated: {major}"

    tree_text = "\n".join(context.tree[:50])
    return (
        "You are an expert software analyst. Analyze this GitHub repository "
        "and provide a structured summary.\n\n"
        "## Repository Info\n"
        f"- Name: {info.full_name}\n"
        f"- Description: {info.description or 'N/A'}\n"
        f"- Language: {info.language or 'N/A'}\n"
        f"- Stars: {info.stargazers_count} | Forks: {info.forks_count}\n\n"
        "## README (truncated)\n"
        f"{context.readme or 'No README available.'}\n\n"
        "## Directory Structure\n"
        f"{tree_text}\n\n"
        "## Dependency Analysis\n"
        f"- Risk Score: {deps.risk_score if deps else 'N/A'}/100\n"
        f"- Total packages: {len(deps.packages) if deps else 0}\n"
        f"- Outdated packages: {len(outdated)}\n"
        f"{major_line}\n\n"
        "## Vulnerabilities\n"
        f"{vuln_text}\n\n"
        "---\n\n"
        "Respond with exactly these three sections, each starting with the "
        "header shown:\n\n"
        "## Overview\n"
        "What this repository is, its purpose and key features (2-3 sentences).\n\n"
        "## Dependency Summary\n"
        "Dependency health: outdated packages, licensing concerns, overall "
        "maintenance status (2-3 sentences).\n\n"
        "## Risk Assessment\n"
        "Overall technical risk considering vulnerabilities, outdated "
        "dependencies and project health (2-3 sentences)."
    )


def parse_summary_text(text: str) -> Summary:
    """Split a reply into its sections; missing sections come back empty."""
    sections: dict[str, str] = {}
    for key, pattern in (
        ("overview", _OVERVIEW),
        ("dependency_summary", _DEPENDENCIES),
        ("risk_summary", _RISK),
    ):
        match = pattern.search(text)
        if match:
            sections[key] = match.group(1).strip()
    return Summary(**sections)
