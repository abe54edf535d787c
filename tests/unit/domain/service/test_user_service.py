"""Unit tests for UserService."""

from uuid import uuid4

import pytest

from presence.domain.error import NotFoundError
from presence.domain.model import User
from presence.domain.repository import UserRepository
from presence.domain.service import UserService
from presence.domain.value import AccountType, UserId
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetById:
    """Tests for get_by_id method."""

    @pytest.mark.asyncio
    async def test_missing_user_raises(self, unit_env):
        service = await unit_env.get(UserService)

        with pytest.raises(NotFoundError, match="User not found"):
            await service.get_by_id(UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_find_missing_user_returns_none(self, unit_env):
        service = await unit_env.get(UserService)

        assert await service.find_by_id(UserId(uuid4())) is None


class TestRecordBillingCustomer:
    """Tests for record_billing_customer method."""

    @pytest.mark.asyncio
    async def test_sets_customer_and_free_account_type(self, unit_env):
        """First customer id is stored and the user becomes a free account."""
        # Arrange
        service = await unit_env.get(UserService)
        repo = await unit_env.get(UserRepository)
        user = await repo.save(User(id=UserId(uuid4()), email="a@example.com"))

        # Act
        updated = await service.record_billing_customer(user.id, "cus_1")

        # Assert
        assert updated.billing_customer_id == "cus_1"
        assert updated.account_type == AccountType.FREE

    @pytest.mark.asyncio
    async def test_keeps_first_customer_id(self, unit_env):
        """A second id never replaces the first."""
        # Arrange
        service = await unit_env.get(UserService)
        repo = await unit_env.get(UserRepository)
        user = await repo.save(User(id=UserId(uuid4())))
        await service.record_billing_customer(user.id, "cus_1")

        # Act
        updated = await service.record_billing_customer(user.id, "cus_2")

        # Assert
        assert updated.billing_customer_id == "cus_1"

    @pytest.mark.asyncio
    async def test_keeps_premium_account_type(self, unit_env):
        """An existing account type is not downgraded."""
        # Arrange
        service = await unit_env.get(UserService)
        repo = await unit_env.get(UserRepository)
        user = await repo.save(
            User(id=UserId(uuid4()), account_type=AccountType.PREMIUM)
        )

        # Act
        updated = await service.record_billing_customer(user.id, "cus_1")

        # Assert
        assert updated.account_type == AccountType.PREMIUM

    @pytest.mark.asyncio
    async def test_missing_user_raises(self, unit_env):
        service = await unit_env.get(UserService)

        with pytest.raises(NotFoundError):
            await service.record_billing_customer(UserId(uuid4()), "cus_1")
