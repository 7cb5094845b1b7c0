"""FastAPI dependencies for the session user.

Usage in any protected router:
    from src.mk_gateway.auth.dependencies import get_current_user

    @router.post("/protected")
    async def protected(user: Annotated[User, Depends(get_current_user)]):
        ...
"""

from typing import Annotated

from fastapi import Depends

from src.mk_common.errors import NotAuthenticatedError
from src.mk_gateway.user.models import User
from src.mk_gateway.user.service import SessionService
from src.mk_store.domain.store import DurableStoreProtocol
from src.mk_store.provider import get_store

_sessions = SessionService()


async def get_optional_user(
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> User | None:
    """Current user, or None for a guest."""
    return await _sessions.current_user(store)


async def get_current_user(
    user: Annotated[User | None, Depends(get_optional_user)],
) -> User:
    """Current user; raises NotAuthenticatedError (401) for a guest."""
    if user is None:
        raise NotAuthenticatedError()
    return user
