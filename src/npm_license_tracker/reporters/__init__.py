"""Output reporters for generating the dependency report."""

from npm_license_tracker.reporters.base import BaseReporter
from npm_license_tracker.reporters.markdown import MarkdownReporter

__all__ = ["BaseReporter", "MarkdownReporter"]
