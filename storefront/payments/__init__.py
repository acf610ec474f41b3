"""
Module 'payments': création de sessions de paiement YooKassa.
"""

from .service import create_payment_session, validate_payment_request, return_url_for
from .yookassa_client import (
    require_credentials,
    make_idempotence_key,
    build_payment_payload,
    create_payment,
    extract_confirmation_url,
)

__all__ = [
    "create_payment_session",
    "validate_payment_request",
    "return_url_for",
    "require_credentials",
    "make_idempotence_key",
    "build_payment_payload",
    "create_payment",
    "extract_confirmation_url",
]
