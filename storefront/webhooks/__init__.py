"""
Module 'webhooks': ingestion des notifications de statut de paiement.
"""

from .events import (
    PAYMENT_SUCCEEDED,
    PAYMENT_WAITING_FOR_CAPTURE,
    PAYMENT_CANCELED,
    KNOWN_EVENTS,
    PaymentObject,
    WebhookEvent,
    parse_envelope,
)
from .handlers import WebhookHandlerRegistry

__all__ = [
    "PAYMENT_SUCCEEDED",
    "PAYMENT_WAITING_FOR_CAPTURE",
    "PAYMENT_CANCELED",
    "KNOWN_EVENTS",
    "PaymentObject",
    "WebhookEvent",
    "parse_envelope",
    "WebhookHandlerRegistry",
]
