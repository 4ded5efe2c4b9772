"""Unit tests for the npm registry resolver."""

import asyncio
from typing import Any, AsyncGenerator

import pytest
from aiohttp import ClientConnectionError
from aioresponses import aioresponses

from npm_license_tracker.models import DependencySpec, PackageMetadata
from npm_license_tracker.resolvers.http import USER_AGENT
from npm_license_tracker.resolvers.npm import (
    NpmRegistryResolver,
    license_page_url,
    package_page_url,
    registry_url,
)


@pytest.fixture
async def npm_resolver() -> AsyncGenerator[NpmRegistryResolver, None]:
    """Return an NpmRegistryResolver instance for testing."""
    resolver = NpmRegistryResolver()
    yield resolver
    await resolver.close()


@pytest.fixture
def npm_url() -> str:
    """Return the registry URL for the sample package."""
    return "https://registry.npmjs.org/left-pad"


@pytest.mark.asyncio
async def test_resolve_successful(
    npm_resolver: NpmRegistryResolver,
    sample_dependency_spec: DependencySpec,
    sample_registry_response: dict[str, Any],
    npm_url: str,
) -> None:
    """Test successful resolution from the registry."""
    with aioresponses() as mock:
        mock.get(npm_url, payload=sample_registry_response)

        metadata = await npm_resolver.resolve(sample_dependency_spec)

    assert metadata == PackageMetadata(license="MIT", description="String left pad")


@pytest.mark.asyncio
async def test_resolve_sends_identifying_user_agent(npm_resolver: NpmRegistryResolver) -> None:
    """Test that the shared session carries the User-Agent header."""
    session = await npm_resolver._get_session()
    assert session.headers["User-Agent"] == USER_AGENT


@pytest.mark.asyncio
async def test_resolve_legacy_license_object(
    npm_resolver: NpmRegistryResolver,
    sample_dependency_spec: DependencySpec,
    npm_url: str,
) -> None:
    """Test the legacy {"type": ...} license form."""
    with aioresponses() as mock:
        mock.get(npm_url, payload={"license": {"type": "BSD-2-Clause", "url": "x"}})

        metadata = await npm_resolver.resolve(sample_dependency_spec)

    assert metadata.license == "BSD-2-Clause"
    assert metadata.description is None


@pytest.mark.asyncio
async def test_resolve_legacy_licenses_array(
    npm_resolver: NpmRegistryResolver,
    sample_dependency_spec: DependencySpec,
    npm_url: str,
) -> None:
    """Test the legacy licenses array form."""
    payload = {"licenses": [{"type": "MIT"}, {"type": "Apache-2.0"}]}
    with aioresponses() as mock:
        mock.get(npm_url, payload=payload)

        metadata = await npm_resolver.resolve(sample_dependency_spec)

    assert metadata.license == "MIT OR Apache-2.0"


@pytest.mark.asyncio
async def test_resolve_missing_fields(
    npm_resolver: NpmRegistryResolver,
    sample_dependency_spec: DependencySpec,
    npm_url: str,
) -> None:
    """Test that absent or mistyped fields default to None."""
    with aioresponses() as mock:
        mock.get(npm_url, payload={"name": "left-pad", "description": 42})

        metadata = await npm_resolver.resolve(sample_dependency_spec)

    assert metadata.is_empty


@pytest.mark.asyncio
async def test_resolve_not_found(
    npm_resolver: NpmRegistryResolver,
    sample_dependency_spec: DependencySpec,
    npm_url: str,
) -> None:
    """Test that a 404 yields empty metadata."""
    with aioresponses() as mock:
        mock.get(npm_url, status=404)

        metadata = await npm_resolver.resolve(sample_dependency_spec)

    assert metadata.is_empty


@pytest.mark.asyncio
async def test_resolve_server_error(
    npm_resolver: NpmRegistryResolver,
    sample_dependency_spec: DependencySpec,
    npm_url: str,
) -> None:
    """Test that a non-success status yields empty metadata without retrying."""
    with aioresponses() as mock:
        mock.get(npm_url, status=500)
        mock.get(npm_url, payload={"license": "MIT"})

        metadata = await npm_resolver.resolve(sample_dependency_spec)

    assert metadata.is_empty


@pytest.mark.asyncio
async def test_resolve_network_error(
    npm_resolver: NpmRegistryResolver,
    sample_dependency_spec: DependencySpec,
    npm_url: str,
) -> None:
    """Test that connection errors are contained."""
    with aioresponses() as mock:
        mock.get(npm_url, exception=ClientConnectionError("connection refused"))

        metadata = await npm_resolver.resolve(sample_dependency_spec)

    assert metadata.is_empty


@pytest.mark.asyncio
async def test_resolve_timeout(
    npm_resolver: NpmRegistryResolver,
    sample_dependency_spec: DependencySpec,
    npm_url: str,
) -> None:
    """Test that timeouts are contained."""
    with aioresponses() as mock:
        mock.get(npm_url, exception=asyncio.TimeoutError())

        metadata = await npm_resolver.resolve(sample_dependency_spec)

    assert metadata.is_empty


@pytest.mark.asyncio
async def test_resolve_malformed_json(
    npm_resolver: NpmRegistryResolver,
    sample_dependency_spec: DependencySpec,
    npm_url: str,
) -> None:
    """Test that an undecodable body yields empty metadata."""
    with aioresponses() as mock:
        mock.get(npm_url, body="<html>oops</html>", content_type="text/html")

        metadata = await npm_resolver.resolve(sample_dependency_spec)

    assert metadata.is_empty


@pytest.mark.asyncio
async def test_resolve_non_object_body(
    npm_resolver: NpmRegistryResolver,
    sample_dependency_spec: DependencySpec,
    npm_url: str,
) -> None:
    """Test that a JSON array body yields empty metadata."""
    with aioresponses() as mock:
        mock.get(npm_url, payload=["MIT"])

        metadata = await npm_resolver.resolve(sample_dependency_spec)

    assert metadata.is_empty


def test_resolver_name() -> None:
    """Test the resolver name."""
    assert NpmRegistryResolver().name == "npm"


class TestLinkBuilders:
    """Test URL construction."""

    def test_registry_url_encodes_scoped_names(self):
        assert registry_url("@types/node") == "https://registry.npmjs.org/%40types%2Fnode"

    def test_package_page_url(self):
        assert package_page_url("left-pad") == "https://www.npmjs.com/package/left-pad"
        assert package_page_url("@babel/core") == "https://www.npmjs.com/package/%40babel%2Fcore"

    def test_license_page_url(self):
        assert license_page_url("MIT") == "https://opensource.org/licenses/MIT"
        assert (
            license_page_url("(MIT OR Apache-2.0)")
            == "https://opensource.org/licenses/%28MIT%20OR%20Apache-2.0%29"
        )

    def test_license_page_url_without_license(self):
        assert license_page_url(None) == "No license information available"
        assert license_page_url("") == "No license information available"


@pytest.mark.asyncio
async def test_session_uses_configured_timeout_and_user_agent() -> None:
    """Test that constructor settings reach the shared session."""
    resolver = NpmRegistryResolver(timeout=5.0, user_agent="ci-bot/1.0")
    try:
        session = await resolver._get_session()
        assert session.timeout.total == 5.0
        assert session.headers["User-Agent"] == "ci-bot/1.0"
        assert await resolver._get_session() is session
    finally:
        await resolver.close()


@pytest.mark.asyncio
async def test_close_allows_a_new_session() -> None:
    """Test that a closed resolver opens a fresh session on next use."""
    async with NpmRegistryResolver() as resolver:
        first = await resolver._get_session()
        await resolver.close()
        assert first.closed
        second = await resolver._get_session()
        assert second is not first
    assert second.closed
