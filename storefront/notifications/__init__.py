"""
Module 'notifications': canal de notification des commandes et prospects (Telegram).
"""

from .schemas import LeadRequest, LeadCartItem
from .message import format_lead_message
from .service import validate_lead, dispatch_lead

__all__ = [
    "LeadRequest",
    "LeadCartItem",
    "format_lead_message",
    "validate_lead",
    "dispatch_lead",
]
