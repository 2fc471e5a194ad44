"""Service layer.

Layer hierarchy:
    Routes (HTTP) -> Services (Logging, timing) -> Repositories (Database)

Services should:
- Orchestrate calls to repositories
- Log and re-raise repository failures without changing them
- Not contain HTTP-specific logic (status codes, response formatting)

Services should NOT:
- Directly execute SQL queries (use repositories)
- Return Pydantic schema objects (routes do the conversion)
"""

from services.users_service import UserService

__all__ = ["UserService"]
