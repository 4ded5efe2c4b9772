"""Dependency scanners for project manifests.

This module provides scanners for extracting dependency specifications from
manifest files.
"""

from pathlib import Path

from npm_license_tracker.scanners.base import BaseScanner
from npm_license_tracker.scanners.package_json import PackageJsonScanner

__all__ = [
    "BaseScanner",
    "PackageJsonScanner",
    "get_scanner",
]

# Registry of available scanners in priority order
_SCANNERS: list[type[BaseScanner]] = [
    PackageJsonScanner,
]


def get_scanner(path: Path) -> BaseScanner:
    """Get the appropriate scanner for a given manifest path.

    Args:
        path: Path to the manifest file.

    Returns:
        Scanner instance configured for the given file.

    Raises:
        ValueError: If no scanner can handle the given file.
    """
    for scanner_cls in _SCANNERS:
        if scanner_cls.can_handle(path):
            return scanner_cls(path)

    raise ValueError(
        f"No scanner available for '{path.name}'. Supported files: package.json"
    )
