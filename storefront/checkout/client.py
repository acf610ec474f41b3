"""
Client HTTP du checkout vers les endpoints de la boutique (/api/send-lead, /api/create-payment).
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import httpx

from storefront.errors import NetworkError, UpstreamError

logger = logging.getLogger(__name__)

# module storefront.checkout.client
@dataclass(frozen=True)
class PaymentResult:
    """Issue à deux branches de la création de paiement: URL de redirection ou raison d'échec."""
    redirect_url: Optional[str] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return bool(self.redirect_url)

    @classmethod
    def redirect(cls, url: str) -> "PaymentResult":
        return cls(redirect_url=url)

    @classmethod
    def failure(cls, reason: str) -> "PaymentResult":
        return cls(reason=reason)


class LeadNotifier(Protocol):
    def notify_order(self, payload: Dict[str, Any]) -> None: ...


class PaymentInitiator(Protocol):
    def create_payment(self, amount: float, order_id: Any, description: str) -> PaymentResult: ...


class StorefrontApiClient:
    """
    Implémente LeadNotifier et PaymentInitiator au-dessus d'un httpx.Client
    (base_url = origine de la boutique; un TestClient FastAPI convient aussi).
    """

    def __init__(self, http: httpx.Client):
        self.http = http

    def notify_order(self, payload: Dict[str, Any]) -> None:
        """POST /api/send-lead; lève UpstreamError/NetworkError en cas d'échec."""
        try:
            resp = self.http.post("/api/send-lead", json=payload)
        except httpx.HTTPError as e:
            raise NetworkError(f"send-lead request failed: {e}")
        if not resp.is_success:
            try:
                data = resp.json()
            except ValueError:
                data = None
            # Un proxy peut répondre un JSON qui n'est pas un objet ("Bad gateway")
            message = data.get("message") if isinstance(data, dict) else None
            raise UpstreamError(message or "Failed to send order", status=resp.status_code)

    def create_payment(self, amount: float, order_id: Any, description: str) -> PaymentResult:
        """POST /api/create-payment; ne lève pas, retourne un PaymentResult."""
        try:
            resp = self.http.post(
                "/api/create-payment",
                json={"amount": amount, "orderId": order_id, "description": description},
            )
        except httpx.HTTPError as e:
            logger.error("checkout.payment request failed error=%s", e)
            return PaymentResult.failure("network")
        if not resp.is_success:
            logger.error("checkout.payment create failed status=%s", resp.status_code)
            return PaymentResult.failure(f"status {resp.status_code}")
        try:
            data = resp.json()
        except ValueError:
            return PaymentResult.failure("invalid response")
        url = data.get("confirmation_url") if isinstance(data, dict) else None
        if not url:
            return PaymentResult.failure("No confirmation URL received")
        return PaymentResult.redirect(url)
