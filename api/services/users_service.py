"""User service: timing and logging around user persistence.

Every repository call is wrapped the same way:
1. an informational "start" entry
2. the repository call, timed with a monotonic clock
3. an informational "done" entry carrying the elapsed milliseconds

If the repository raises, exactly one error entry is written with the
original exception and a fixed message, and the same exception is re-raised.
Not-found (None) and rejected writes (False) are ordinary results, never
errors.
"""

import time
import uuid

from core.logger import LoggerAdapter
from core.telemetry import Clock, Stopwatch
from models import User
from repositories.user_repository import UserRepositoryProtocol


class UserService:
    """Service for user operations."""

    def __init__(
        self,
        repository: UserRepositoryProtocol,
        logger: LoggerAdapter,
        clock: Clock = time.perf_counter,
    ):
        self._repository = repository
        self._logger = logger
        self._clock = clock

    async def get_all(self) -> list[User]:
        """Get every user. An empty store yields an empty list."""
        self._logger.log_information("Retrieving all users")
        stopwatch = Stopwatch.start_new(self._clock)
        try:
            users = await self._repository.get_all()
        except Exception as exc:
            self._logger.log_error(
                exc, "Something went wrong while retrieving all users"
            )
            raise
        elapsed_ms = stopwatch.elapsed_ms()
        self._logger.log_information("All users retrieved in {0}ms", elapsed_ms)
        return list(users)

    async def get_by_id(self, user_id: uuid.UUID) -> User | None:
        """Get a user by ID. Returns None when no such user exists."""
        self._logger.log_information("Retrieving user with id: {0}", user_id)
        stopwatch = Stopwatch.start_new(self._clock)
        try:
            user = await self._repository.get_by_id(user_id)
        except Exception as exc:
            self._logger.log_error(
                exc, "Something went wrong while retrieving user with id {0}", user_id
            )
            raise
        elapsed_ms = stopwatch.elapsed_ms()
        self._logger.log_information(
            "User with id {0} retrieved in {1}ms", user_id, elapsed_ms
        )
        return user

    async def create(self, user: User) -> bool:
        """Persist a new user. Returns the repository's answer unchanged."""
        self._logger.log_information(
            "Creating user with id {0} and name: {1}", user.id, user.full_name
        )
        stopwatch = Stopwatch.start_new(self._clock)
        try:
            created = await self._repository.create(user)
        except Exception as exc:
            self._logger.log_error(exc, "Something went wrong while creating a user")
            raise
        elapsed_ms = stopwatch.elapsed_ms()
        self._logger.log_information(
            "User with id {0} created in {1}ms", user.id, elapsed_ms
        )
        return created

    async def delete_by_id(self, user_id: uuid.UUID) -> bool:
        """Delete a user by ID. Returns True if a user was removed."""
        self._logger.log_information("Deleting user with id: {0}", user_id)
        stopwatch = Stopwatch.start_new(self._clock)
        try:
            deleted = await self._repository.delete_by_id(user_id)
        except Exception as exc:
            self._logger.log_error(
                exc, "Something went wrong while deleting user with id {0}", user_id
            )
            raise
        elapsed_ms = stopwatch.elapsed_ms()
        self._logger.log_information(
            "User with id {0} deleted in {1}ms", user_id, elapsed_ms
        )
        return deleted
