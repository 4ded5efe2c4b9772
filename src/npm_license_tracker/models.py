"""Core data models for npm_license_tracker.

This module defines the fundamental data structures used throughout the
license tracking system: declared dependencies, registry metadata, records
recovered from a previous report and the records written to a new one.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DependencySpec:
    """Immutable specification of a declared dependency.

    Represents a dependency extracted from a project manifest. Frozen for
    hashability to enable use as dictionary keys.

    Attributes:
        name: Package name (e.g., "left-pad" or "@types/node").
        version: Declared version range (e.g., "^1.3.0"). Informational only.
        source: Optional manifest section (e.g., "devDependencies").
    """

    name: str
    version: Optional[str] = None
    source: Optional[str] = None


@dataclass
class PackageMetadata:
    """License and description fetched from the package registry.

    Attributes:
        license: Raw license string as published (e.g., "MIT").
        description: Optional one-line package description.
    """

    license: Optional[str] = None
    description: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        """Return True if the registry yielded no usable fields."""
        return not self.license and not self.description


@dataclass
class CachedRecord:
    """A dependency entry recovered from a previously written report.

    The report only keeps derived values, so the original license string is
    not available here; only the license link and the permissiveness flag.

    Attributes:
        name: Package name.
        registry_link: Link to the package page on the registry website.
        license_link: Link to the license definition, or the
            missing-license text.
        description: Package description ("" when the placeholder was shown).
        is_permissive: False if the entry carried the warning glyph.
        last_updated: Cache timestamp exactly as it appeared in the report.
    """

    name: str
    registry_link: str
    license_link: str
    description: str
    is_permissive: bool
    last_updated: str


@dataclass(frozen=True)
class ReportRecord:
    """A single dependency entry to be written to the report.

    Attributes:
        name: Package name.
        is_permissive: Classification of the license at fetch or cache time.
        description: Package description, "" if unknown.
        registry_link: Link to the package page on the registry website.
        license_link: Link to the license definition, or the
            missing-license text.
        last_updated: Cache timestamp text.
        from_cache: True if the record was reused from a previous report.
    """

    name: str
    is_permissive: bool
    description: str
    registry_link: str
    license_link: str
    last_updated: str
    from_cache: bool = False

    @property
    def has_warning(self) -> bool:
        """Return True if the record is rendered with the warning glyph."""
        return not self.is_permissive

    @classmethod
    def from_cached(cls, cached: CachedRecord) -> "ReportRecord":
        """Build a record that reuses a cached entry verbatim.

        Args:
            cached: Entry recovered from the previous report.

        Returns:
            ReportRecord carrying the cached links, description, flag and
            timestamp unchanged.
        """
        return cls(
            name=cached.name,
            is_permissive=cached.is_permissive,
            description=cached.description,
            registry_link=cached.registry_link,
            license_link=cached.license_link,
            last_updated=cached.last_updated,
            from_cache=True,
        )
