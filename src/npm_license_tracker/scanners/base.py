"""Base interface for dependency scanners.

Scanners extract dependency specifications from project manifests.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from npm_license_tracker.models import DependencySpec


class BaseScanner(ABC):
    """Abstract base class for dependency scanners.

    Attributes:
        source_path: Optional path to the manifest being scanned.
    """

    def __init__(self, source_path: Optional[Path] = None) -> None:
        """Initialize the scanner.

        Args:
            source_path: Optional path to the manifest file.
        """
        self.source_path = source_path

    @abstractmethod
    def scan(self) -> list[DependencySpec]:
        """Scan the source and extract dependency specifications.

        Returns:
            List of DependencySpec objects sorted by name.

        Raises:
            FileNotFoundError: If the source file does not exist.
            ValueError: If the source format is invalid.
        """
        ...

    @classmethod
    @abstractmethod
    def can_handle(cls, path: Path) -> bool:
        """Check if this scanner can handle the given file.

        Args:
            path: Path to check.

        Returns:
            True if this scanner can process the file, False otherwise.
        """
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return a human-readable name for this scanner's source type."""
        ...
