"""Domain models for mk_chat."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


@dataclass
class ChatMessage:
    id: str
    product_id: str      # thread key
    sender_id: str
    text: str
    created_at: int      # epoch ms
    attachment: str | None = None   # opaque image payload reference
    location: GeoPoint | None = None


@dataclass
class ThreadState:
    """UI-facing state of one thread; never persisted."""

    product_id: str
    is_open: bool = False
    unread: int = 0
    notification_visible: bool = False


@dataclass(frozen=True)
class ReplyNotification:
    """Raised when a reply lands in a thread that is not open."""

    product_id: str
    message: ChatMessage
    unread: int


def message_to_document(m: ChatMessage) -> dict[str, Any]:
    doc: dict[str, Any] = {
        "id": m.id,
        "productId": m.product_id,
        "senderId": m.sender_id,
        "text": m.text,
        "createdAt": m.created_at,
    }
    if m.attachment is not None:
        doc["attachment"] = m.attachment
    if m.location is not None:
        doc["location"] = {"lat": m.location.lat, "lng": m.location.lng}
    return doc


def document_to_message(doc: dict[str, Any]) -> ChatMessage:
    loc = doc.get("location")
    return ChatMessage(
        id=str(doc["id"]),
        product_id=str(doc["productId"]),
        sender_id=str(doc["senderId"]),
        text=doc.get("text") or "",
        created_at=int(doc["createdAt"]),
        attachment=doc.get("attachment"),
        location=GeoPoint(lat=float(loc["lat"]), lng=float(loc["lng"])) if loc else None,
    )
