"""Data models for dep-inspector."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ── Manifest ──────────────────────────────────────────────────────────────

class PackageJson(BaseModel):
    """The parts of a ``package.json`` manifest we care about."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    version: Optional[str] = None
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(
        default_factory=dict, alias="devDependencies"
    )

    @field_validator("dependencies", "dev_dependencies", mode="before")
    @classmethod
    def _null_as_empty(cls, value: object) -> object:
        return {} if value is None else value

    def merged_dependencies(self) -> dict[str, str]:
        """Runtime and dev dependencies in one map; dev entries win."""
        return {**self.dependencies, **self.dev_dependencies}


# ── Registry data ─────────────────────────────────────────────────────────

class PackageMetadata(BaseModel):
    """Latest published version of a package, as reported by the registry."""

    latest_version: str
    license: Optional[str] = None


class AdvisoryRecord(BaseModel):
    """One advisory entry from the bulk advisory endpoint."""

    severity: str
    title: str
    url: str


# ── Dependency analysis ───────────────────────────────────────────────────

class VersionDiff(str, Enum):
    """How far a declared version lags the latest release."""

    major = "major"
    minor = "minor"
    patch = "patch"
    up_to_date = "up-to-date"


class Severity(str, Enum):
    """Advisory severity tiers."""

    critical = "critical"
    high = "high"
    moderate = "moderate"
    low = "low"


class PackageInfo(BaseModel):
    """Status of one direct dependency."""

    model_config = ConfigDict(frozen=True)

    name: str
    current_version: str
    latest_version: str
    is_outdated: bool
    version_diff: VersionDiff
    license: Optional[str] = None

    @property
    def display_diff(self) -> str:
        icons = {
            VersionDiff.major: "🔴",
            VersionDiff.minor: "🟠",
            VersionDiff.patch: "🟡",
            VersionDiff.up_to_date: "🟢",
        }
        return f"{icons[self.version_diff]} {self.version_diff.value}"


class Vulnerability(BaseModel):
    """A known security advisory affecting a dependency."""

    model_config = ConfigDict(frozen=True)

    package_name: str
    severity: str  # one of Severity; other values are scored as low
    title: str
    url: str


class DependencyAnalysisResult(BaseModel):
    """Outcome of one dependency analysis run."""

    model_config = ConfigDict(frozen=True)

    packages: tuple[PackageInfo, ...] = ()
    vulnerabilities: tuple[Vulnerability, ...] = ()
    risk_score: int = Field(default=100, ge=0, le=100)

    @property
    def outdated(self) -> list[PackageInfo]:
        return [p for p in self.packages if p.is_outdated]


# ── Repository context ────────────────────────────────────────────────────

class RepoInfo(BaseModel):
    """Basic GitHub repository metadata."""

    full_name: str
    description: Optional[str] = None
    stargazers_count: int = 0
    forks_count: int = 0
    language: Optional[str] = None
    topics: list[str] = Field(default_factory=list)
    html_url: str = ""


class RepoContext(BaseModel):
    """Everything fetched from GitHub for one repository."""

    info: RepoInfo
    package_json: Optional[PackageJson] = None
    tree: list[str] = Field(default_factory=list)
    readme: str = ""


# ── Summary & full response ───────────────────────────────────────────────

class Summary(BaseModel):
    """LLM-written prose summary, split into its three sections."""

    overview: str = ""
    dependency_summary: str = ""
    risk_summary: str = ""


class AnalysisResponse(BaseModel):
    """Complete result of analyzing one repository."""

    repository: RepoContext
    dependencies: Optional[DependencyAnalysisResult] = None
    summary: Optional[Summary] = None
