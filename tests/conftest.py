"""Pytest configuration and fixtures."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest

from npm_license_tracker.models import DependencySpec, ReportRecord


@pytest.fixture
def fixed_now() -> datetime:
    """Return a fixed reference time for cache and pipeline tests."""
    return datetime(2026, 10, 19, 12, 0, 0)


@pytest.fixture
def sample_dependency_spec() -> DependencySpec:
    """Return a sample DependencySpec."""
    return DependencySpec(name="left-pad", version="1.3.0", source="dependencies")


@pytest.fixture
def sample_registry_response() -> dict[str, Any]:
    """Return a trimmed npm registry document."""
    return {
        "name": "left-pad",
        "description": "String left pad",
        "license": "MIT",
        "dist-tags": {"latest": "1.3.0"},
    }


@pytest.fixture
def permissive_record() -> ReportRecord:
    """Return a record for a permissively licensed package."""
    return ReportRecord(
        name="left-pad",
        is_permissive=True,
        description="String left pad",
        registry_link="https://www.npmjs.com/package/left-pad",
        license_link="https://opensource.org/licenses/MIT",
        last_updated="2026-10-18 09:30:15",
    )


@pytest.fixture
def non_permissive_record() -> ReportRecord:
    """Return a record for a package with a copyleft license."""
    return ReportRecord(
        name="copyleft-lib",
        is_permissive=False,
        description="",
        registry_link="https://www.npmjs.com/package/copyleft-lib",
        license_link="https://opensource.org/licenses/GPL-3.0",
        last_updated="2026-10-17 23:01:59",
    )


@pytest.fixture
def write_manifest(tmp_path: Path):
    """Return a helper that writes a package.json into tmp_path."""

    def _write(data: Any, name: str = "package.json") -> Path:
        path = tmp_path / name
        content = data if isinstance(data, str) else json.dumps(data)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
