"""
Cas d'usage 'payments': valide la demande, construit le paiement et renvoie l'URL de confirmation.
"""
import logging
import math
from typing import Any, Optional

from storefront import config
from storefront.errors import ValidationError
from . import yookassa_client

logger = logging.getLogger(__name__)

# module storefront.payments.service
def validate_payment_request(body: Any) -> tuple[float, Any, str]:
    """
    Valide {amount, orderId, description} et retourne (amount, order_id, description).
    - amount: nombre (pas un booléen) strictement positif
    - orderId: présent et non vide (str ou nombre)
    - description: chaîne non vide
    Lève ValidationError (400) avant tout appel à la passerelle.
    """
    if not isinstance(body, dict):
        raise ValidationError("Invalid request body")

    amount = body.get("amount")
    if isinstance(amount, bool) or not isinstance(amount, (int, float)) or not math.isfinite(amount) or amount <= 0:
        logger.warning("payments.create invalid amount=%r", amount)
        raise ValidationError("Invalid amount", field="amount")

    order_id = body.get("orderId")
    if order_id is None or order_id == "" or isinstance(order_id, bool) or not isinstance(order_id, (str, int, float)):
        logger.warning("payments.create missing orderId")
        raise ValidationError("Missing orderId", field="orderId")

    description = body.get("description")
    if not isinstance(description, str) or not description.strip():
        logger.warning("payments.create invalid description")
        raise ValidationError("Invalid description", field="description")

    return float(amount), order_id, description

def return_url_for(origin: Optional[str]) -> str:
    base = (origin or "").rstrip("/") or config.PUBLIC_BASE_URL
    return f"{base}{config.SUCCESS_ROUTE}"

def create_payment_session(body: Any, origin: Optional[str] = None) -> str:
    """
    Crée une session de paiement et retourne confirmation_url.
    Étapes:
      1) identifiants présents (sinon ConfigurationError, message générique)
      2) validation de la demande (sinon ValidationError 400)
      3) appel passerelle avec clé d'idempotence {orderId}-{horodatage}
      4) extraction de confirmation_url (sinon UpstreamError générique)
    """
    yookassa_client.require_credentials()
    amount, order_id, description = validate_payment_request(body)

    payload = yookassa_client.build_payment_payload(
        amount=amount,
        order_id=order_id,
        description=description,
        return_url=return_url_for(origin),
    )
    key = yookassa_client.make_idempotence_key(order_id)
    payment = yookassa_client.create_payment(payload, key)
    confirmation_url = yookassa_client.extract_confirmation_url(payment)
    logger.info("payments.create ok order_id=%s payment_id=%s amount=%.2f", order_id, payment.get("id"), amount)
    return confirmation_url
