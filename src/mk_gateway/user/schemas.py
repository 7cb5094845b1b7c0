"""Pydantic request/response schemas for mk_gateway.

All responses are wrapped in ApiResponse at the router layer.
"""

from pydantic import BaseModel, Field, field_validator

from src.mk_gateway.user.models import User


class LoginRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=64)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name must not be blank")
        return v.strip()


class UserOut(BaseModel):
    id: str
    name: str
    email: str   # derived from the name; multi-word names need not be RFC-valid
    avatar: str | None

    @classmethod
    def from_domain(cls, u: User) -> "UserOut":
        return cls(id=u.id, name=u.name, email=u.email, avatar=u.avatar)
