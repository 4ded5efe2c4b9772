"""npm registry resolver for fetching license metadata.

This resolver fetches the package document from the public npm registry and
extracts the license and description fields.
"""

import asyncio
import logging
from typing import Any, Optional
from urllib.parse import quote

import aiohttp

from npm_license_tracker.layout import NO_LICENSE_TEXT
from npm_license_tracker.models import DependencySpec, PackageMetadata
from npm_license_tracker.resolvers.http import HttpResolver

logger = logging.getLogger(__name__)

REGISTRY_URL = "https://registry.npmjs.org"
PACKAGE_PAGE_URL = "https://www.npmjs.com/package"
LICENSE_PAGE_URL = "https://opensource.org/licenses"


def registry_url(name: str) -> str:
    """Return the registry document URL for a package."""
    return f"{REGISTRY_URL}/{quote(name, safe='')}"


def package_page_url(name: str) -> str:
    """Return the npmjs.com page URL for a package."""
    return f"{PACKAGE_PAGE_URL}/{quote(name, safe='')}"


def license_page_url(license_text: Optional[str]) -> str:
    """Return the license definition URL for a license string.

    Args:
        license_text: Raw license string from the registry.

    Returns:
        opensource.org URL for the license, or the missing-license text
        when no license is known.
    """
    if not license_text:
        return NO_LICENSE_TEXT
    return f"{LICENSE_PAGE_URL}/{quote(license_text, safe='')}"


def _extract_license(data: dict[str, Any]) -> Optional[str]:
    """Extract the license string from a registry document.

    Handles the modern string form, the legacy ``{"type": ...}`` object and
    the legacy ``licenses`` array.
    """
    license_field = data.get("license")
    if isinstance(license_field, str):
        return license_field.strip() or None
    if isinstance(license_field, dict):
        license_type = license_field.get("type")
        if isinstance(license_type, str) and license_type.strip():
            return license_type.strip()

    legacy = data.get("licenses")
    if isinstance(legacy, list):
        types = [
            entry.get("type").strip()
            for entry in legacy
            if isinstance(entry, dict)
            and isinstance(entry.get("type"), str)
            and entry.get("type").strip()
        ]
        if types:
            return " OR ".join(types)

    return None


class NpmRegistryResolver(HttpResolver):
    """Resolver for fetching license metadata from the npm registry.

    Issues exactly one GET per package and never retries. Every failure
    (network error, timeout, non-200 status, malformed body) is logged and
    turned into an empty PackageMetadata.

    Use as an async context manager or call close() when done.
    """

    @property
    def name(self) -> str:
        """Return "npm"."""
        return "npm"

    async def resolve(self, spec: DependencySpec) -> PackageMetadata:
        """Resolve license metadata from the npm registry.

        Args:
            spec: Dependency specification to resolve.

        Returns:
            PackageMetadata with license and description, empty on failure.
        """
        url = registry_url(spec.name)
        logger.debug("Fetching npm metadata from %s", url)

        try:
            session = await self._get_session()
            async with session.get(url) as response:
                if response.status == 404:
                    logger.warning("Package %s not found on npm", spec.name)
                    return PackageMetadata()

                if response.status != 200:
                    logger.error(
                        "npm registry returned status %d for %s",
                        response.status,
                        spec.name,
                    )
                    return PackageMetadata()

                try:
                    data = await response.json(content_type=None)
                except ValueError as e:
                    logger.error(
                        "Failed to parse JSON response for %s: %s", spec.name, e
                    )
                    return PackageMetadata()

        except aiohttp.ClientError as e:
            logger.error("Network error fetching npm metadata for %s: %s", spec.name, e)
            return PackageMetadata()
        except asyncio.TimeoutError:
            logger.error("Timed out fetching npm metadata for %s", spec.name)
            return PackageMetadata()

        return self._parse_registry_response(data, spec)

    def _parse_registry_response(self, data: Any, spec: DependencySpec) -> PackageMetadata:
        """Parse a registry document into PackageMetadata.

        Args:
            data: Decoded JSON body.
            spec: Original dependency specification.

        Returns:
            Parsed PackageMetadata, empty if the body is not an object.
        """
        if not isinstance(data, dict):
            logger.error("Unexpected registry response for %s: not an object", spec.name)
            return PackageMetadata()

        description = data.get("description")
        if not isinstance(description, str):
            description = None

        return PackageMetadata(
            license=_extract_license(data),
            description=description,
        )
