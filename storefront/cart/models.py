"""
Lignes de panier (pas de réseau, pas de persistance).
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

# module storefront.cart.models
@dataclass
class CartLine:
    product_id: str
    title: str
    price: float
    quantity: int = 1

    def __post_init__(self):
        if self.price < 0:
            raise ValueError("price must be >= 0")
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")

    @property
    def line_total(self) -> float:
        return self.price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["CartLine"]:
        """
        Reconstruit une ligne depuis un dict stocké.
        - Accepte les clés "product_id" ou "id", "title" ou "name" (format du front).
        - Retourne None si la ligne est inexploitable (id vide, prix/quantité invalides).
        """
        if not isinstance(data, dict):
            return None
        product_id = str(data.get("product_id") or data.get("id") or "").strip()
        if not product_id:
            return None
        try:
            price = float(data.get("price") or 0)
            quantity = int(data.get("quantity") or 0)
        except (TypeError, ValueError):
            return None
        if price < 0 or quantity < 1:
            return None
        title = str(data.get("title") or data.get("name") or product_id)
        return cls(product_id=product_id, title=title, price=price, quantity=quantity)
