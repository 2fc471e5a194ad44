"""Repository layer for database operations.

Repositories encapsulate all database queries, keeping services free of SQL.
This separation provides:
- Single source of truth for database operations
- Easier testing (repositories can be mocked)
- A swappable storage backend behind UserRepositoryProtocol
"""

from repositories.user_repository import UserRepository, UserRepositoryProtocol

__all__ = [
    "UserRepository",
    "UserRepositoryProtocol",
]
