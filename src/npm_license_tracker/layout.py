"""Textual layout of the dependency report.

The report is both the output document and the cache read back on the next
run. The template and the cache parser both take their markers from here.
"""

ENTRY_MARKER = "### "
WARNING_GLYPH = "⚠️"

DESCRIPTION_PLACEHOLDER = "No description available."
NO_LICENSE_TEXT = "No license information available"

REGISTRY_LINE_PREFIX = "- **NPM:** "
LICENSE_LINE_PREFIX = "- **License:** "
CACHE_LINE_PREFIX = "- *Cache:* "

REVIEW_NOTE = "**Note:** This license may not be permissive. Please review before use."

# Local time, second precision
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def template_globals() -> dict[str, str]:
    """Return the layout constants exposed to report templates."""
    return {
        "entry_marker": ENTRY_MARKER,
        "warning_glyph": WARNING_GLYPH,
        "description_placeholder": DESCRIPTION_PLACEHOLDER,
        "registry_line_prefix": REGISTRY_LINE_PREFIX,
        "license_line_prefix": LICENSE_LINE_PREFIX,
        "cache_line_prefix": CACHE_LINE_PREFIX,
        "review_note": REVIEW_NOTE,
    }
