"""User endpoints.

Routes only translate service results into HTTP responses:
- GET    /users            -> 200 with a (possibly empty) list
- GET    /users/{user_id}  -> 200 with the user, 404 when absent
- POST   /users            -> 201 with the user and a Location header, 400 when rejected
- DELETE /users/{user_id}  -> 200 when removed, 404 when absent

Exceptions raised by the service are left to the application's exception
handlers.
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from starlette import status

from core.database import DbSession
from core.logger import StructlogLoggerAdapter
from mappers import to_user, to_user_response
from repositories.user_repository import UserRepository
from schemas import CreateUserRequest, UserResponse
from services.users_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(db: DbSession) -> UserService:
    return UserService(
        UserRepository(db), StructlogLoggerAdapter(UserService.__module__)
    )


UserServiceDep = Annotated[UserService, Depends(get_user_service)]


@router.get("", response_model=list[UserResponse])
async def get_all_users(service: UserServiceDep) -> list[UserResponse]:
    """List every user."""
    users = await service.get_all()
    return [to_user_response(user) for user in users]


@router.get(
    "/{user_id}",
    name="get_user_by_id",
    response_model=UserResponse,
    responses={404: {"description": "User not found"}},
)
async def get_user_by_id(user_id: uuid.UUID, service: UserServiceDep) -> UserResponse:
    """Get a single user by ID."""
    user = await service.get_by_id(user_id)

    if user is None:
        raise HTTPException(status_code=404, detail="User not found")

    return to_user_response(user)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
    responses={400: {"description": "User could not be created"}},
)
async def create_user(
    body: CreateUserRequest,
    request: Request,
    response: Response,
    service: UserServiceDep,
) -> UserResponse | Response:
    """Create a user. The ID is generated server-side."""
    user = to_user(body)

    created = await service.create(user)
    if not created:
        return Response(status_code=status.HTTP_400_BAD_REQUEST)

    response.headers["Location"] = str(
        request.url_for("get_user_by_id", user_id=str(user.id))
    )
    return to_user_response(user)


@router.delete(
    "/{user_id}",
    response_class=Response,
    responses={
        200: {"description": "User deleted"},
        404: {"description": "User not found"},
    },
)
async def delete_user_by_id(user_id: uuid.UUID, service: UserServiceDep) -> Response:
    """Delete a user by ID."""
    deleted = await service.delete_by_id(user_id)

    if not deleted:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    return Response(status_code=status.HTTP_200_OK)
