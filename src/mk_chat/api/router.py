"""mk_chat REST endpoints.

GET  /chats/{product_id}/messages — thread history, oldest first
POST /chats/{product_id}/messages — send (login required); seller reply follows
POST /chats/{product_id}/open     — open the thread, clears unread
POST /chats/{product_id}/close    — close the thread
POST /chats/{product_id}/detach   — end the thread's lifetime
GET  /chats/{product_id}/state    — is_open / unread / notification_visible
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field

from src.mk_chat.application.service import ChatApplicationService
from src.mk_chat.domain.models import ChatMessage, GeoPoint, ThreadState
from src.mk_common.response import ApiResponse, success_response
from src.mk_gateway.auth.dependencies import get_current_user
from src.mk_gateway.user.models import User
from src.mk_store.domain.store import DurableStoreProtocol
from src.mk_store.provider import get_store

router = APIRouter(prefix="/chats", tags=["chats"])

_service = ChatApplicationService()


class LocationIn(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class MessageRequest(BaseModel):
    text: str | None = Field(None, max_length=2000)
    attachment: str | None = None
    location: LocationIn | None = None


class MessageOut(BaseModel):
    id: str
    product_id: str
    sender_id: str
    text: str
    created_at: int
    attachment: str | None = None
    location: dict | None = None

    @classmethod
    def from_domain(cls, m: ChatMessage) -> "MessageOut":
        return cls(
            id=m.id,
            product_id=m.product_id,
            sender_id=m.sender_id,
            text=m.text,
            created_at=m.created_at,
            attachment=m.attachment,
            location={"lat": m.location.lat, "lng": m.location.lng} if m.location else None,
        )


class ThreadStateOut(BaseModel):
    product_id: str
    is_open: bool
    unread: int
    notification_visible: bool

    @classmethod
    def from_domain(cls, s: ThreadState) -> "ThreadStateOut":
        return cls(
            product_id=s.product_id,
            is_open=s.is_open,
            unread=s.unread,
            notification_visible=s.notification_visible,
        )


@router.get("/{product_id}/messages")
async def list_messages(
    product_id: str,
    request: Request,
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> ApiResponse:
    messages = await _service.history(store, product_id)
    return success_response([MessageOut.from_domain(m).model_dump() for m in messages], request)


@router.post("/{product_id}/messages", status_code=status.HTTP_201_CREATED)
async def send_message(
    product_id: str,
    request: Request,
    body: MessageRequest,
    user: Annotated[User, Depends(get_current_user)],
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> ApiResponse:
    location = GeoPoint(lat=body.location.lat, lng=body.location.lng) if body.location else None
    message = await _service.send(
        store, user, product_id, text=body.text, attachment=body.attachment, location=location
    )
    return success_response(MessageOut.from_domain(message).model_dump(), request)


@router.post("/{product_id}/open")
async def open_thread(
    product_id: str,
    request: Request,
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> ApiResponse:
    state = await _service.open(store, product_id)
    return success_response(ThreadStateOut.from_domain(state).model_dump(), request)


@router.post("/{product_id}/close")
async def close_thread(
    product_id: str,
    request: Request,
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> ApiResponse:
    state = await _service.close(store, product_id)
    return success_response(ThreadStateOut.from_domain(state).model_dump(), request)


@router.post("/{product_id}/detach")
async def detach_thread(product_id: str, request: Request) -> ApiResponse:
    _service.detach(product_id)
    return success_response(None, request)


@router.get("/{product_id}/state")
async def thread_state(
    product_id: str,
    request: Request,
    store: Annotated[DurableStoreProtocol, Depends(get_store)],
) -> ApiResponse:
    state = await _service.state(store, product_id)
    return success_response(ThreadStateOut.from_domain(state).model_dump(), request)
