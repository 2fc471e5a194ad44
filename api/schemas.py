"""Pydantic schemas for API request/response validation."""

import uuid

from pydantic import BaseModel, ConfigDict, Field


class CreateUserRequest(BaseModel):
    """Body of POST /users. The id is assigned server-side."""

    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: str = Field(min_length=1, max_length=255)


class UserResponse(BaseModel):
    """User response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    full_name: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
