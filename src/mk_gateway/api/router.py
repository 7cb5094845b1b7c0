"""Session API router: login, logout, me.

Login is name-only (no password): it creates a fresh user and makes it the
current user of this store. All endpoints return ApiResponse.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from src.mk_common.response import ApiResponse, success_response
from src.mk_gateway.auth.dependencies import get_optional_user
from src.mk_gateway.user.models import User
from src.mk_gateway.user.schemas import LoginRequest, UserOut
from src.mk_gateway.user.service import SessionService
from src.mk_store.domain.store import DurableStoreProtocol
from src.mk_store.provider import get_store

router = APIRouter(prefix="/auth", tags=["auth"])
_service = SessionService()


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="Log in by display name",
)
async def login(
    request: Request,
    body: LoginRequest,
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> ApiResponse:
    user = await _service.login(store, body.name)
    return success_response(
        UserOut.from_domain(user).model_dump(), request, message="Login successful"
    )


@router.post("/logout", response_model=ApiResponse, summary="Clear the current user")
async def logout(
    request: Request,
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> ApiResponse:
    await _service.logout(store)
    return success_response(None, request)


@router.get("/me", response_model=ApiResponse, summary="Current user, null for a guest")
async def me(
    request: Request,
    user: Annotated[User | None, Depends(get_optional_user)],
) -> ApiResponse:
    data = UserOut.from_domain(user).model_dump() if user else None
    return success_response(data, request)
