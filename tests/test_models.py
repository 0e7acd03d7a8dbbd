"""Tests for the data models."""

import pytest
from pydantic import ValidationError

from dep_inspector.analysis.dependencies import build_package_info
from dep_inspector.models import (
    DependencyAnalysisResult,
    PackageJson,
    VersionDiff,
)


class TestPackageJson:
    def test_camel_case_dev_dependencies(self):
        pkg = PackageJson.model_validate(
            {"dependencies": {"a": "1.0.0"}, "devDependencies": {"b": "2.0.0"}}
        )
        assert pkg.dev_dependencies == {"b": "2.0.0"}

    def test_null_maps_are_empty(self):
        pkg = PackageJson.model_validate({"dependencies": None, "devDependencies": None})
        assert pkg.merged_dependencies() == {}

    def test_extra_keys_ignored(self):
        pkg = PackageJson.model_validate({"name": "x", "scripts": {"test": "jest"}})
        assert pkg.name == "x"

    def test_merge_dev_wins(self):
        pkg = PackageJson(
            dependencies={"a": "1.0.0", "b": "1.0.0"},
            dev_dependencies={"b": "2.0.0"},
        )
        assert pkg.merged_dependencies() == {"a": "1.0.0", "b": "2.0.0"}


class TestPackageInfo:
    def test_display_diff(self):
        info = build_package_info("a", "1.0.0", "2.0.0")
        assert info.display_diff == "🔴 major"

    def test_serializes_diff_value(self):
        info = build_package_info("a", "1.0.0", "1.0.0")
        assert info.model_dump(mode="json")["version_diff"] == "up-to-date"
        assert info.version_diff is VersionDiff.up_to_date


class TestDependencyAnalysisResult:
    def test_defaults(self):
        result = DependencyAnalysisResult()
        assert result.packages == ()
        assert result.risk_score == 100

    def test_frozen(self):
        result = DependencyAnalysisResult()
        with pytest.raises(ValidationError):
            result.risk_score = 5

    def test_score_bounds(self):
        with pytest.raises(ValidationError):
            DependencyAnalysisResult(risk_score=101)

    def test_outdated(self):
        result = DependencyAnalysisResult(
            packages=(
                build_package_info("a", "1.0.0", "1.1.0"),
                build_package_info("b", "1.0.0", "1.0.0"),
            ),
            risk_score=98,
        )
        assert [p.name for p in result.outdated] == ["a"]
