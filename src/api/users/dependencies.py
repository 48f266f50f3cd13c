"""Dependency injection for the Users bounded context."""

from typing import Annotated

from fastapi import Depends

from infrastructure.database.dependencies import (
    MongoConnectionCache,
    get_connection_cache,
)
from infrastructure.settings import get_mongo_settings
from users.application.observability import (
    DefaultUserServiceProbe,
    UserServiceProbe,
)
from users.application.services import UserService
from users.infrastructure.repository import MongoUserRepository


def get_user_service_probe() -> UserServiceProbe:
    return DefaultUserServiceProbe()


def get_user_service(
    cache: Annotated[MongoConnectionCache, Depends(get_connection_cache)],
    probe: Annotated[UserServiceProbe, Depends(get_user_service_probe)],
) -> UserService:
    """Get UserService bound to the shared connection cache."""
    repository = MongoUserRepository(cache, get_mongo_settings())
    return UserService(repository=repository, probe=probe)
