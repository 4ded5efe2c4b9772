"""Bounded-concurrency fetch/cache pipeline.

For every declared dependency the pipeline either reuses a fresh entry from
the previous report or asks the registry, then classifies the license and
builds the ReportRecord.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from npm_license_tracker.cache import ReportCache, format_timestamp
from npm_license_tracker.classifier import is_permissive_license
from npm_license_tracker.models import DependencySpec, PackageMetadata, ReportRecord
from npm_license_tracker.resolvers.base import BaseResolver
from npm_license_tracker.resolvers.npm import license_page_url, package_page_url

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 10

ProgressCallback = Callable[[int, int], None]


@dataclass
class PipelineResult:
    """Outcome of a pipeline run.

    Attributes:
        records: One ReportRecord per dependency, in input order.
        non_permissive: Number of records flagged as non-permissive.
        cached: Number of records reused from the previous report.
    """

    records: list[ReportRecord] = field(default_factory=list)
    non_permissive: int = 0
    cached: int = 0

    @property
    def total(self) -> int:
        return len(self.records)

    @property
    def fetched(self) -> int:
        return self.total - self.cached


class DependencyPipeline:
    """Resolves a batch of dependencies with a bounded number in flight.

    Attributes:
        resolver: Registry resolver used on cache misses.
        cache: Entries recovered from the previous report.
        concurrency: Maximum number of units of work running at once.
    """

    def __init__(
        self,
        resolver: BaseResolver,
        cache: Optional[ReportCache] = None,
        concurrency: int = DEFAULT_CONCURRENCY,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the pipeline.

        Args:
            resolver: Registry resolver used on cache misses.
            cache: Previous report cache. If None, every dependency is fetched.
            concurrency: Maximum number of simultaneous units of work.
            clock: Source of the current local time.

        Raises:
            ValueError: If concurrency is less than 1.
        """
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")

        self.resolver = resolver
        self.cache = cache or ReportCache()
        self.concurrency = concurrency
        self._clock = clock

    async def _process(self, spec: DependencySpec, now: datetime) -> ReportRecord:
        cached = self.cache.lookup(spec.name, now)
        if cached is not None:
            logger.debug("Using cached entry for %s (%s)", spec.name, cached.last_updated)
            return ReportRecord.from_cached(cached)

        try:
            metadata = await self.resolver.resolve(spec)
        except Exception as e:
            logger.error("Exception resolving %s: %s", spec.name, e)
            metadata = PackageMetadata()

        if metadata.is_empty:
            logger.warning("No registry metadata for %s", spec.name)

        return ReportRecord(
            name=spec.name,
            is_permissive=is_permissive_license(metadata.license),
            description=" ".join((metadata.description or "").split()),
            registry_link=package_page_url(spec.name),
            license_link=license_page_url(metadata.license),
            last_updated=format_timestamp(self._clock()),
        )

    async def run(
        self,
        specs: list[DependencySpec],
        on_progress: Optional[ProgressCallback] = None,
    ) -> PipelineResult:
        """Produce one ReportRecord per dependency.

        Args:
            specs: Dependencies, sorted by name.
            on_progress: Optional callback receiving (completed, total) after
                each dependency finishes. Errors it raises are logged.

        Returns:
            PipelineResult with records in the same order as ``specs``.
        """
        result = PipelineResult()
        total = len(specs)
        if total == 0:
            return result

        semaphore = asyncio.Semaphore(self.concurrency)
        now = self._clock()
        completed = 0

        async def _run_one(spec: DependencySpec) -> ReportRecord:
            nonlocal completed
            async with semaphore:
                record = await self._process(spec, now)

            if record.from_cache:
                result.cached += 1
            if not record.is_permissive:
                result.non_permissive += 1
            completed += 1

            if on_progress is not None:
                try:
                    on_progress(completed, total)
                except Exception as e:
                    logger.debug("Progress callback failed: %s", e)

            return record

        logger.info("Processing %d dependencies (concurrency %d)", total, self.concurrency)
        records = await asyncio.gather(*(_run_one(spec) for spec in specs))

        # Order by the sorted input, not by completion
        by_name = {record.name: record for record in records}
        result.records = [by_name[spec.name] for spec in specs]

        logger.info(
            "Processed %d dependencies: %d cached, %d non-permissive",
            result.total,
            result.cached,
            result.non_permissive,
        )
        return result
