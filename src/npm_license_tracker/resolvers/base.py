"""Base interface for license resolvers.

Resolvers are responsible for fetching license metadata from a package
registry.
"""

from abc import ABC, abstractmethod

from npm_license_tracker.models import DependencySpec, PackageMetadata


class BaseResolver(ABC):
    """Abstract base class for license resolvers.

    Resolvers are best-effort: a failed lookup yields an empty
    PackageMetadata instead of raising, so a single unreachable package
    never aborts a whole run.
    """

    @abstractmethod
    async def resolve(self, spec: DependencySpec) -> PackageMetadata:
        """Resolve license metadata for a package.

        Args:
            spec: Dependency specification to resolve.

        Returns:
            PackageMetadata, empty if resolution failed.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the resolver name for logging/debugging."""
        ...
