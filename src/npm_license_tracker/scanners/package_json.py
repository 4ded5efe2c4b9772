"""Scanner for npm package.json manifests.

Only dependency names are relevant for license tracking; the declared
version ranges are kept for information.
"""

import json
from pathlib import Path

from npm_license_tracker.models import DependencySpec
from npm_license_tracker.scanners.base import BaseScanner

# Later sections overwrite earlier ones for the same package name
DEPENDENCY_SECTIONS = ("dependencies", "devDependencies")


class PackageJsonScanner(BaseScanner):
    """Scanner for package.json files.

    Merges the runtime and development dependency mappings::

        {
            "dependencies": {"left-pad": "^1.3.0"},
            "devDependencies": {"jest": "^29.0.0"}
        }
    """

    @classmethod
    def can_handle(cls, path: Path) -> bool:
        """Check if this scanner can handle the given file.

        Args:
            path: Path to check.

        Returns:
            True if the file is named "package.json".
        """
        return path.name == "package.json"

    @property
    def source_name(self) -> str:
        """Return "package.json"."""
        return "package.json"

    def scan(self) -> list[DependencySpec]:
        """Scan package.json and extract dependency specifications.

        Returns:
            List of DependencySpec objects, one per distinct package name,
            sorted alphabetically.

        Raises:
            FileNotFoundError: If the manifest does not exist.
            ValueError: If source_path is not provided, the JSON is invalid,
                or a dependency section is not an object.
        """
        if self.source_path is None:
            raise ValueError("source_path must be provided")

        if not self.source_path.exists():
            raise FileNotFoundError(f"Manifest not found: {self.source_path}")

        try:
            with open(self.source_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {self.source_path}: {e}") from e
        except OSError as e:
            raise ValueError(f"Cannot read {self.source_path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {self.source_path}")

        merged: dict[str, DependencySpec] = {}
        for section in DEPENDENCY_SECTIONS:
            entries = data.get(section)
            if entries is None:
                continue
            if not isinstance(entries, dict):
                raise ValueError(
                    f"Section '{section}' in {self.source_path} must be an object"
                )

            for name, version in entries.items():
                merged[name] = DependencySpec(
                    name=name,
                    version=version if isinstance(version, str) else None,
                    source=section,
                )

        return [merged[name] for name in sorted(merged)]
