"""
Module 'checkout': formulaire, créneau de livraison, machine à états de soumission.
"""

from .form import CheckoutForm, PaymentMethod, validate_field, validate_form, normalize_phone
from .delivery import DeliverySlotPicker, TIME_SLOTS, format_slot
from .client import PaymentResult, StorefrontApiClient, LeadNotifier, PaymentInitiator
from .session import CheckoutSession, CheckoutStatus, OrderCompletion, Navigator

__all__ = [
    "CheckoutForm",
    "PaymentMethod",
    "validate_field",
    "validate_form",
    "normalize_phone",
    "DeliverySlotPicker",
    "TIME_SLOTS",
    "format_slot",
    "PaymentResult",
    "StorefrontApiClient",
    "LeadNotifier",
    "PaymentInitiator",
    "CheckoutSession",
    "CheckoutStatus",
    "OrderCompletion",
    "Navigator",
]
