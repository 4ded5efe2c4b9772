"""Markdown reporter for generating the dependency license report.

This module provides a reporter that renders ReportRecords into the
Markdown report using Jinja2 templates. The rendered report is read back by
the cache on the next run.
"""

from datetime import datetime
from importlib.resources import files
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, Template

from npm_license_tracker.cache import format_timestamp
from npm_license_tracker.layout import template_globals
from npm_license_tracker.models import ReportRecord
from npm_license_tracker.reporters.base import BaseReporter

DEFAULT_TEMPLATE = "dependencies.md.j2"


def _environment(**kwargs) -> Environment:
    env = Environment(
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        **kwargs,
    )
    env.globals.update(template_globals())
    return env


class MarkdownReporter(BaseReporter):
    """Reporter that generates the Markdown dependency report.

    Attributes:
        template: The Jinja2 template to use for rendering.
    """

    def __init__(self, template_path: Optional[Path] = None) -> None:
        """Initialize the Markdown reporter.

        Args:
            template_path: Optional path to a custom Jinja2 template.
                If not provided, uses the default bundled template. Custom
                templates must keep the entry layout to stay readable as a
                cache.
        """
        if template_path:
            env = _environment(loader=FileSystemLoader(template_path.parent))
            self.template = env.get_template(template_path.name)
        else:
            self.template = self._load_default_template()

    def _load_default_template(self) -> Template:
        """Load the default bundled Jinja2 template.

        Returns:
            The default template loaded from package resources.
        """
        template_content = (
            files("npm_license_tracker.templates")
            .joinpath(DEFAULT_TEMPLATE)
            .read_text(encoding="utf-8")
        )
        return _environment().from_string(template_content)

    def render(
        self,
        records: list[ReportRecord],
        generated_at: Optional[datetime] = None,
    ) -> str:
        """Render report records to Markdown format.

        Args:
            records: Records in output order.
            generated_at: Generation time shown in the header. Defaults to now.

        Returns:
            Rendered Markdown document as a string.
        """
        return self.template.render(
            records=records,
            total=len(records),
            non_permissive=sum(1 for record in records if record.has_warning),
            generated_at=format_timestamp(generated_at or datetime.now()),
        )

    @property
    def format_name(self) -> str:
        """Return "markdown"."""
        return "markdown"

    @property
    def default_extension(self) -> str:
        """Return ".md"."""
        return ".md"
