"""Session service: login, current user, logout.

There is exactly one current user per store (or none, for a guest). The
user is never read from ambient state by other services: routers resolve
it once through the auth dependency and pass it down explicitly.
"""

import logging
from urllib.parse import quote

from src.mk_common.id_generator import generate_id
from src.mk_gateway.user.models import User, document_to_user, user_to_document
from src.mk_store.documents import read_document, write_document
from src.mk_store.domain.store import DurableStoreProtocol
from src.mk_store.keys import USER_KEY

logger = logging.getLogger(__name__)

_AVATAR_URL = "https://ui-avatars.com/api/?name={name}&background=10b981&color=fff"


def derive_email(name: str) -> str:
    """'Jane Smith' -> 'jane.smith@example.com' (first space only)."""
    return f"{name.lower().replace(' ', '.', 1)}@example.com"


def avatar_url(name: str) -> str:
    return _AVATAR_URL.format(name=quote(name, safe=""))


class SessionService:
    """Stateless service — instantiate once, reuse across requests."""

    async def login(self, store: DurableStoreProtocol, name: str) -> User:
        """Create a fresh user for `name` and make it the current user.

        Logging in again replaces the previous user (new id).
        """
        name = name.strip()
        user = User(
            id=generate_id(),
            name=name,
            email=derive_email(name),
            avatar=avatar_url(name),
        )
        await write_document(store, USER_KEY, user_to_document(user))
        logger.info("Login: user=%s", user.id)
        return user

    async def current_user(self, store: DurableStoreProtocol) -> User | None:
        doc = await read_document(store, USER_KEY)
        if not isinstance(doc, dict):
            return None
        try:
            return document_to_user(doc)
        except (KeyError, TypeError):
            logger.warning("Stored session user is malformed, treating as guest")
            return None

    async def logout(self, store: DurableStoreProtocol) -> None:
        await store.remove(USER_KEY)
