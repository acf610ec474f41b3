"""
Calcul des montants de commande (pur, sans effet de bord).
"""
from dataclasses import dataclass
from typing import Iterable, Optional

from storefront.config import FREE_SHIPPING_THRESHOLD, SHIPPING_COST
from .models import CartLine

# module storefront.cart.totals
@dataclass(frozen=True)
class OrderTotals:
    subtotal: float
    shipping: float
    total: float
    free_shipping: bool
    remaining_for_free_shipping: float
    progress_percent: float
    item_count: int


def compute_totals(
    lines: Iterable[CartLine],
    threshold: Optional[float] = None,
    shipping_cost: Optional[float] = None,
) -> OrderTotals:
    """
    Calcule subtotal, livraison et total d'un panier.
    - shipping = 0 si subtotal >= seuil, sinon frais fixes.
    - Panier vide: subtotal 0 < seuil, donc les frais fixes s'appliquent.
    - remaining_for_free_shipping = max(0, seuil - subtotal).
    """
    threshold = FREE_SHIPPING_THRESHOLD if threshold is None else threshold
    shipping_cost = SHIPPING_COST if shipping_cost is None else shipping_cost
    lines = list(lines)

    subtotal = sum(line.price * line.quantity for line in lines)
    shipping = 0 if subtotal >= threshold else shipping_cost
    remaining = max(0, threshold - subtotal)
    progress = min(100.0, (subtotal / threshold) * 100) if threshold > 0 else 100.0
    return OrderTotals(
        subtotal=subtotal,
        shipping=shipping,
        total=subtotal + shipping,
        free_shipping=shipping == 0,
        remaining_for_free_shipping=remaining,
        progress_percent=progress,
        item_count=sum(line.quantity for line in lines),
    )


def describe_lines(lines: Iterable[CartLine]) -> str:
    """Description lisible pour la passerelle: "Titre x2, Autre x1"."""
    return ", ".join(f"{line.title} x{line.quantity}" for line in lines)
