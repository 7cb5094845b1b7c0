"""Session user — a value object, copied into and out of the store."""

from dataclasses import dataclass
from typing import Any


@dataclass
class User:
    id: str
    name: str
    email: str
    avatar: str | None = None


def user_to_document(u: User) -> dict[str, Any]:
    return {"id": u.id, "name": u.name, "email": u.email, "avatar": u.avatar}


def document_to_user(doc: dict[str, Any]) -> User:
    return User(
        id=str(doc["id"]),
        name=doc["name"],
        email=doc["email"],
        avatar=doc.get("avatar"),
    )
