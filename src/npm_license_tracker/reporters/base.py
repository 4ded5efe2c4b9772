"""Base interface for output reporters.

Reporters generate formatted output from the records produced by the
pipeline.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from npm_license_tracker.models import ReportRecord


class BaseReporter(ABC):
    """Abstract base class for output reporters."""

    @abstractmethod
    def render(
        self,
        records: list[ReportRecord],
        generated_at: Optional[datetime] = None,
    ) -> str:
        """Render report records to formatted output.

        Args:
            records: Records in output order.
            generated_at: Generation time shown in the header. Defaults to now.

        Returns:
            Rendered output as a string.
        """
        ...

    def write(
        self,
        records: list[ReportRecord],
        output_path: Path,
        generated_at: Optional[datetime] = None,
    ) -> None:
        """Render and write output to a file.

        Args:
            records: Records in output order.
            output_path: Path to write the output file.
            generated_at: Generation time shown in the header.
        """
        content = self.render(records, generated_at)
        output_path.write_text(content, encoding="utf-8")

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the output format name."""
        ...

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Return the default file extension for this format."""
        ...
