"""Fixture factory shared by unit and integration tests."""

import pytest_asyncio

from presence.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Make a fixture yielding a REQUEST-scoped container.

    Each test gets a fresh container, so in-memory repositories and the mock
    billing client start empty. Components in ``unmock`` use their real
    implementation; for "persistence" that needs DATABASE__URL pointing at a
    migrated database.

    Usage:
        unit_env = create_env_fixture()

        @pytest.mark.asyncio
        async def test_profile(unit_env):
            service = await unit_env.get(ProfileService)
    """

    @pytest_asyncio.fixture
    async def _env():
        container = build_test_container(unmock=unmock)
        try:
            async with container() as request_container:
                yield request_container
        finally:
            await container.close()

    return _env
