"""
Cas d'usage 'notifications': valide une demande (commande ou B2B) et la transmet au canal humain.
"""
import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from storefront.errors import ValidationError
from . import telegram_client
from .message import format_lead_message
from .schemas import LeadRequest

logger = logging.getLogger(__name__)

# module storefront.notifications.service
def validate_lead(body: Any) -> LeadRequest:
    """
    - type obligatoire ("Order" ou "B2B")
    - phone obligatoire pour "Order", facultatif pour "B2B"
    """
    if not isinstance(body, dict) or body.get("type") not in ("Order", "B2B"):
        raise ValidationError("Missing required field: type", field="type")
    try:
        lead = LeadRequest.model_validate(body)
    except PydanticValidationError as e:
        logger.warning("notifications.lead invalid payload errors=%s", e.errors())
        raise ValidationError("Invalid request body")
    if lead.type == "Order" and not lead.phone:
        raise ValidationError("Missing required field: phone (required for Order)", field="phone")
    return lead

def dispatch_lead(body: Any) -> LeadRequest:
    """Valide, met en forme puis envoie la notification; retourne la demande validée."""
    lead = validate_lead(body)
    telegram_client.require_credentials()
    telegram_client.send_message(format_lead_message(lead))
    logger.info("notifications.lead sent type=%s items=%s", lead.type, len(lead.cart))
    return lead
