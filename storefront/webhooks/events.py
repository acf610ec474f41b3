"""
Désérialisation des notifications YooKassa (enveloppe {event, object}).
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

PAYMENT_SUCCEEDED = "payment.succeeded"
PAYMENT_WAITING_FOR_CAPTURE = "payment.waiting_for_capture"
PAYMENT_CANCELED = "payment.canceled"
KNOWN_EVENTS = (PAYMENT_SUCCEEDED, PAYMENT_WAITING_FOR_CAPTURE, PAYMENT_CANCELED)

# module storefront.webhooks.events
class PaymentAmount(BaseModel):
    value: str = "0"
    currency: str = ""

    @field_validator("value", "currency", mode="before")
    @classmethod
    def _as_str(cls, v: Any) -> str:
        return "" if v is None else str(v)


class PaymentObject(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    status: Optional[str] = None
    amount: Optional[PaymentAmount] = None
    description: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("id", "status", "description", mode="before")
    @classmethod
    def _optional_str(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

    @field_validator("metadata", mode="before")
    @classmethod
    def _metadata_dict(cls, v: Any) -> Dict[str, Any]:
        return v if isinstance(v, dict) else {}


@dataclass
class WebhookEvent:
    event_type: str
    payment_id: Optional[str]
    status: Optional[str]
    amount: str
    currency: str
    description: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    received_at: str = ""

    @property
    def is_known(self) -> bool:
        return self.event_type in KNOWN_EVENTS


def parse_envelope(body: Any, now: Optional[datetime] = None) -> Optional[WebhookEvent]:
    """
    Extrait un WebhookEvent depuis le corps JSON.
    - Retourne None si le corps n'est pas un objet, ou si "event"/"object" manquent
      (l'appelant acquitte alors avec {"status": "ignored"}).
    - Tolérant: "object" vide accepté, amount absent => "0", description absente => "".
    """
    if not isinstance(body, dict):
        return None
    event_type = body.get("event")
    obj = body.get("object")
    if not event_type or not isinstance(obj, dict):
        return None

    payment = PaymentObject.model_validate(obj)
    received_at = (now or datetime.now(timezone.utc)).isoformat()
    return WebhookEvent(
        event_type=str(event_type),
        payment_id=payment.id,
        status=payment.status,
        amount=(payment.amount.value if payment.amount else "0") or "0",
        currency=payment.amount.currency if payment.amount else "",
        description=payment.description or "",
        metadata=payment.metadata,
        received_at=received_at,
    )
