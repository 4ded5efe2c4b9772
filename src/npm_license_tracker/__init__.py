"""NPM License Tracker - License report generator for npm projects.

This package scans the dependencies declared in a ``package.json``, looks up
their license metadata on the npm registry and writes a Markdown report that
doubles as a time-boxed cache for subsequent runs.
"""

__version__ = "0.1.0"
__author__ = "forkrul"

from npm_license_tracker.models import (
    CachedRecord,
    DependencySpec,
    PackageMetadata,
    ReportRecord,
)

__all__ = [
    "__version__",
    "CachedRecord",
    "DependencySpec",
    "PackageMetadata",
    "ReportRecord",
]
