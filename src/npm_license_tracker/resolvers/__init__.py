"""License resolvers for fetching metadata from package registries."""

from npm_license_tracker.resolvers.base import BaseResolver
from npm_license_tracker.resolvers.http import HttpResolver
from npm_license_tracker.resolvers.npm import (
    NpmRegistryResolver,
    license_page_url,
    package_page_url,
)

__all__ = [
    "BaseResolver",
    "HttpResolver",
    "NpmRegistryResolver",
    "license_page_url",
    "package_page_url",
]
