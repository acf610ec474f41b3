"""
Points d'extension par type d'événement de paiement.
Le code aval (CRM, statut de commande) s'y enregistre sans toucher à la vue webhook.
"""
import logging
from typing import Callable, Dict, List, Optional

from .events import (
    KNOWN_EVENTS,
    PAYMENT_CANCELED,
    PAYMENT_SUCCEEDED,
    PAYMENT_WAITING_FOR_CAPTURE,
    WebhookEvent,
)

logger = logging.getLogger(__name__)

WebhookHandler = Callable[[WebhookEvent], None]

# module storefront.webhooks.handlers
def on_payment_succeeded(event: WebhookEvent) -> None:
    """Paiement capturé: point d'entrée pour marquer la commande payée."""
    logger.debug("payments.webhook succeeded payment_id=%s (no order store registered)", event.payment_id)

def on_payment_waiting_for_capture(event: WebhookEvent) -> None:
    """Paiement en deux étapes en attente de capture (non utilisé: capture=true à la création)."""
    logger.debug("payments.webhook waiting_for_capture payment_id=%s", event.payment_id)

def on_payment_canceled(event: WebhookEvent) -> None:
    """Paiement annulé: point d'entrée pour annuler la commande."""
    logger.debug("payments.webhook canceled payment_id=%s (no order store registered)", event.payment_id)


class WebhookHandlerRegistry:
    """
    Registre {type d'événement: [handlers]}.
    - Instancié par l'application (app.state), jamais partagé au niveau module.
    - dispatch() retourne False pour un type inconnu (loggé puis ignoré).
    """

    def __init__(self, with_defaults: bool = True):
        self._handlers: Dict[str, List[WebhookHandler]] = {t: [] for t in KNOWN_EVENTS}
        if with_defaults:
            self._handlers[PAYMENT_SUCCEEDED].append(on_payment_succeeded)
            self._handlers[PAYMENT_WAITING_FOR_CAPTURE].append(on_payment_waiting_for_capture)
            self._handlers[PAYMENT_CANCELED].append(on_payment_canceled)

    def register(self, event_type: str, handler: Optional[WebhookHandler] = None):
        """Enregistre un handler; utilisable aussi comme décorateur."""
        if event_type not in self._handlers:
            raise ValueError(f"Unknown payment event type: {event_type}")

        def _add(fn: WebhookHandler) -> WebhookHandler:
            self._handlers[event_type].append(fn)
            return fn

        if handler is not None:
            return _add(handler)
        return _add

    def handlers_for(self, event_type: str) -> List[WebhookHandler]:
        return list(self._handlers.get(event_type, []))

    def dispatch(self, event: WebhookEvent) -> bool:
        if event.event_type not in self._handlers:
            logger.info("payments.webhook unhandled event type=%s payment_id=%s", event.event_type, event.payment_id)
            return False
        for handler in self._handlers[event.event_type]:
            handler(event)
        return True
