"""
Mise en forme HTML (parse_mode=HTML) du message de notification.
"""
from html import escape
from typing import List, Optional

from .schemas import LeadCartItem, LeadRequest

# module storefront.notifications.message
def _fmt_money(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:.2f}"

def _text(value: Optional[str]) -> str:
    return escape(value) if value else "-"

def format_cart_lines(items: List[LeadCartItem]) -> List[str]:
    lines = []
    for item in items:
        price = f" ({_fmt_money(item.price)} ₽)" if item.price else ""
        lines.append(f"• {escape(item.title)} — {item.quantity} шт{price}")
    return lines

def format_lead_message(lead: LeadRequest) -> str:
    """
    Construit le message envoyé au canal humain.
    - Toujours: type, nom, téléphone; email et commentaire si présents.
    - Order: lignes du panier, adresse et créneau de livraison si présents.
    - Les valeurs saisies par le client sont échappées (HTML).
    """
    parts = [
        "🍊 <b>FreshBox — новая заявка!</b>",
        "",
        f"<b>Тип:</b> {lead.type}",
        f"<b>Имя:</b> {_text(lead.name)}",
        f"<b>Телефон:</b> {_text(lead.phone)}",
    ]
    if lead.email:
        parts.append(f"<b>Email:</b> {escape(lead.email)}")
    if lead.comment:
        parts.append(f"<b>Комментарий:</b> {escape(lead.comment)}")

    if lead.type == "Order":
        parts.append("")
        parts.append("<b>Корзина:</b>")
        parts.extend(format_cart_lines(lead.cart))
        if lead.address:
            parts.append(f"<b>Адрес доставки:</b> {escape(lead.address)}")
        if lead.deliveryTime:
            parts.append(f"<b>Время доставки:</b> {escape(lead.deliveryTime)}")
    return "\n".join(parts).strip()
