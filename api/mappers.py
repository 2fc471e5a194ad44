"""Conversions between request/response schemas and the User model."""

import uuid

from models import User
from schemas import CreateUserRequest, UserResponse


def to_user(request: CreateUserRequest) -> User:
    """Build a new User with a freshly generated id."""
    return User(id=uuid.uuid4(), full_name=request.full_name)


def to_user_response(user: User) -> UserResponse:
    return UserResponse.model_validate(user)
