"""Property-based tests for UserService.

Uses Hypothesis to check invariants across many generated inputs:
- Unknown ids always give None and never an error entry
- Any repository failure is logged exactly once and re-raised as-is
- get_all always returns the repository's users and logs two info entries
- create returns exactly the repository's boolean
"""

import asyncio
import sqlite3
from unittest.mock import AsyncMock, MagicMock

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from core.logger import LoggerAdapter
from models import User
from repositories.user_repository import UserRepositoryProtocol
from services.users_service import UserService

hypothesis_settings = settings(
    max_examples=50,
    suppress_health_check=[HealthCheck.too_slow],
)

users = st.builds(
    User,
    id=st.uuids(),
    full_name=st.text(min_size=1, max_size=60),
)

failure_types = st.sampled_from(
    [sqlite3.OperationalError, ConnectionError, TimeoutError, RuntimeError, OSError]
)

ERROR_MESSAGES = {
    "get_all": "Something went wrong while retrieving all users",
    "get_by_id": "Something went wrong while retrieving user with id {0}",
    "create": "Something went wrong while creating a user",
    "delete_by_id": "Something went wrong while deleting user with id {0}",
}


def _make_service() -> tuple[UserService, AsyncMock, MagicMock]:
    repo = AsyncMock(spec=UserRepositoryProtocol)
    logger = MagicMock(spec=LoggerAdapter)
    return UserService(repo, logger), repo, logger


@pytest.mark.unit
class TestUserServiceInvariants:
    @given(user_id=st.uuids())
    @hypothesis_settings
    def test_unknown_id_returns_none_without_error(self, user_id):
        service, repo, logger = _make_service()
        repo.get_by_id.return_value = None

        result = asyncio.run(service.get_by_id(user_id))

        assert result is None
        logger.log_error.assert_not_called()
        assert logger.log_information.call_count == 2

    @given(
        operation=st.sampled_from(sorted(ERROR_MESSAGES)),
        failure_type=failure_types,
        message=st.text(max_size=40),
        user=users,
    )
    @hypothesis_settings
    def test_failure_logged_once_and_reraised(
        self, operation, failure_type, message, user
    ):
        service, repo, logger = _make_service()
        error = failure_type(message)
        getattr(repo, operation).side_effect = error

        if operation == "get_all":
            call = service.get_all()
            expected_args: tuple = ()
        elif operation == "create":
            call = service.create(user)
            expected_args = ()
        else:
            call = getattr(service, operation)(user.id)
            expected_args = (user.id,)

        with pytest.raises(failure_type) as exc_info:
            asyncio.run(call)

        assert exc_info.value is error
        assert str(exc_info.value) == message
        logger.log_error.assert_called_once_with(
            error, ERROR_MESSAGES[operation], *expected_args
        )

    @given(stored=st.lists(users, max_size=10))
    @hypothesis_settings
    def test_get_all_returns_repository_users(self, stored):
        service, repo, logger = _make_service()
        repo.get_all.return_value = stored

        result = asyncio.run(service.get_all())

        assert result == stored
        assert logger.log_information.call_count == 2
        logger.log_error.assert_not_called()

    @given(user=users, answer=st.booleans())
    @hypothesis_settings
    def test_create_returns_repository_answer(self, user, answer):
        service, repo, _ = _make_service()
        repo.create.return_value = answer

        assert asyncio.run(service.create(user)) is answer
