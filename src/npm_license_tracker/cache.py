"""Report-backed cache layer for license lookups.

The previously written report is the only persisted state. This module reads
it back into CachedRecord entries and decides which of them are still fresh
enough to skip the registry lookup.
"""

import logging
import re
from collections.abc import Callable
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

from npm_license_tracker.layout import (
    CACHE_LINE_PREFIX,
    DESCRIPTION_PLACEHOLDER,
    ENTRY_MARKER,
    TIMESTAMP_FORMAT,
    WARNING_GLYPH,
)
from npm_license_tracker.models import CachedRecord

logger = logging.getLogger(__name__)

DEFAULT_MAX_AGE_DAYS = 7
MAX_AGE_DAYS_LIMIT = 3650

# Formats produced by this tool and by common locale renderings
_STRPTIME_FORMATS = (
    TIMESTAMP_FORMAT,
    "%m/%d/%Y, %I:%M:%S %p",
    "%m/%d/%Y, %H:%M:%S",
    "%d. %m. %Y %H:%M:%S",
    "%B %d, %Y %H:%M:%S",
)

# "D. M. YYYY H", left behind by truncated locale timestamps
_DAY_MONTH_YEAR_HOUR = re.compile(r"(\d+)\.\s*(\d+)\.\s*(\d+)\s*(\d+)")

_ENTRY_SPLIT = re.compile(rf"^{re.escape(ENTRY_MARKER)}", re.MULTILINE)
_MARKDOWN_LINK = re.compile(r"\[(?P<text>.*?)\]\((?P<target>.*)\)\s*$")


def _to_naive_local(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def _parse_iso(text: str) -> Optional[datetime]:
    candidate = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return _to_naive_local(datetime.fromisoformat(candidate))
    except (ValueError, OverflowError):
        return None


def _parse_known_formats(text: str) -> Optional[datetime]:
    for fmt in _STRPTIME_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _parse_day_month_year_hour(text: str) -> Optional[datetime]:
    match = _DAY_MONTH_YEAR_HOUR.search(text)
    if match is None:
        return None
    day, month, year, hour = (int(part) for part in match.groups())
    try:
        return datetime(year, month, day, hour)
    except ValueError:
        return None


TIMESTAMP_PARSERS: tuple[Callable[[str], Optional[datetime]], ...] = (
    _parse_iso,
    _parse_known_formats,
    _parse_day_month_year_hour,
)


def parse_timestamp(text: str) -> Optional[datetime]:
    """Parse a cache timestamp written by this or an earlier tool version.

    Tries each parser in TIMESTAMP_PARSERS in order and returns the first
    result.

    Args:
        text: Timestamp text from a report.

    Returns:
        Naive local datetime, or None if no parser accepts the text.
    """
    text = text.strip()
    if not text:
        return None

    for parser in TIMESTAMP_PARSERS:
        parsed = parser(text)
        if parsed is not None:
            return parsed
    return None


def timestamp_or_oldest(text: str) -> datetime:
    """Parse a cache timestamp, falling back to the oldest possible instant.

    An unparseable timestamp makes the entry stale rather than trusted.
    """
    parsed = parse_timestamp(text)
    if parsed is None:
        logger.warning("Unable to parse date: %r. Using oldest possible date.", text)
        return datetime.min
    return parsed


def format_timestamp(value: datetime) -> str:
    """Format a datetime the way cache timestamps are written."""
    return value.strftime(TIMESTAMP_FORMAT)


def _link_target(line: str) -> Optional[str]:
    match = _MARKDOWN_LINK.search(line)
    return match.group("target") if match else None


def _parse_entry(entry: str) -> Optional[CachedRecord]:
    """Parse one report block (without its leading marker).

    Non-blank lines are positional: title, description, registry link,
    license link. The cache line is located by its prefix.
    """
    lines = [line.strip() for line in entry.splitlines() if line.strip()]
    if len(lines) < 4:
        return None

    title = lines[0]
    is_permissive = WARNING_GLYPH not in title
    name = title.replace(WARNING_GLYPH, "").strip()
    if not name:
        return None

    description = lines[1]
    if description == DESCRIPTION_PLACEHOLDER:
        description = ""

    registry_link = _link_target(lines[2])
    license_link = _link_target(lines[3])
    if registry_link is None or license_link is None:
        return None

    cache_prefix = CACHE_LINE_PREFIX.strip()
    last_updated = ""
    for line in lines:
        if line.startswith(cache_prefix):
            last_updated = line[len(cache_prefix):].replace("*", "").strip()
            break

    return CachedRecord(
        name=name,
        registry_link=registry_link,
        license_link=license_link,
        description=description,
        is_permissive=is_permissive,
        last_updated=last_updated,
    )


def parse_report(content: str) -> dict[str, CachedRecord]:
    """Parse a previously rendered report into cached records.

    Args:
        content: Full report text.

    Returns:
        Dictionary mapping package name to CachedRecord. Malformed entries
        are skipped.
    """
    records: dict[str, CachedRecord] = {}

    for entry in _ENTRY_SPLIT.split(content)[1:]:
        record = _parse_entry(entry)
        if record is None:
            first_line = entry.splitlines()[0] if entry else ""
            logger.warning("Skipping malformed cache entry: %r", first_line)
            continue
        records[record.name] = record

    return records


class ReportCache:
    """Read-only cache of dependency entries from the previous report.

    Entries are trusted while their timestamp is strictly newer than
    ``now - max_age``; older or unparseable ones count as stale.

    Attributes:
        records: Mapping of package name to CachedRecord.
        max_age: Maximum age of a usable entry.
    """

    def __init__(
        self,
        records: Optional[dict[str, CachedRecord]] = None,
        max_age_days: int = DEFAULT_MAX_AGE_DAYS,
    ) -> None:
        """Initialize the cache.

        Args:
            records: Pre-parsed records. If None, the cache is empty.
            max_age_days: Number of days before an entry is stale, between 0
                and MAX_AGE_DAYS_LIMIT.

        Raises:
            ValueError: If max_age_days is out of range.
        """
        if not 0 <= max_age_days <= MAX_AGE_DAYS_LIMIT:
            raise ValueError(
                f"max_age_days must be between 0 and {MAX_AGE_DAYS_LIMIT}"
            )

        self.records = dict(records or {})
        self.max_age = timedelta(days=max_age_days)

    @classmethod
    def load(cls, path: Path, max_age_days: int = DEFAULT_MAX_AGE_DAYS) -> "ReportCache":
        """Load the cache from a previously written report.

        A missing or unreadable report yields an empty cache.

        Args:
            path: Path to the report file.
            max_age_days: Number of days before an entry is stale.

        Returns:
            ReportCache populated from the report.
        """
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning("No previous report at %s, fetching all dependencies", path)
            return cls(max_age_days=max_age_days)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Error reading cached dependencies from %s: %s", path, e)
            return cls(max_age_days=max_age_days)

        records = parse_report(content)
        logger.debug("Loaded %d cached entries from %s", len(records), path)
        return cls(records, max_age_days=max_age_days)

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, name: object) -> bool:
        return name in self.records

    def get(self, name: str) -> Optional[CachedRecord]:
        """Return the cached record for a package regardless of age."""
        return self.records.get(name)

    def is_fresh(self, record: CachedRecord, now: datetime) -> bool:
        """Check whether a cached record can be reused.

        Args:
            record: Cached record to check.
            now: Reference time (naive local).

        Returns:
            True if the record's timestamp is strictly after now - max_age.
        """
        return timestamp_or_oldest(record.last_updated) > now - self.max_age

    def lookup(self, name: str, now: datetime) -> Optional[CachedRecord]:
        """Return the cached record for a package if it is still fresh.

        Args:
            name: Package name.
            now: Reference time (naive local).

        Returns:
            CachedRecord, or None on a miss or a stale entry.
        """
        record = self.records.get(name)
        if record is None or not self.is_fresh(record, now):
            return None
        return record

    def stats(self, now: datetime) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with cache information:
                - count: Number of cached entries
                - fresh: Entries usable at ``now``
                - stale: Entries that would be re-fetched
        """
        fresh = sum(1 for record in self.records.values() if self.is_fresh(record, now))
        return {
            "count": len(self.records),
            "fresh": fresh,
            "stale": len(self.records) - fresh,
        }
