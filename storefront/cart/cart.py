"""
Panier mutable: ajout, suppression, quantités, vidage.
Chaque mutation est persistée via le store fourni.
"""
from dataclasses import replace
from typing import Any, Dict, List, Optional

from .models import CartLine
from .store import CartStore, InMemoryCartStore
from .totals import OrderTotals, compute_totals

# module storefront.cart.cart
class Cart:
    def __init__(self, store: Optional[CartStore] = None):
        self.store = store or InMemoryCartStore()
        self._lines: List[CartLine] = []
        for raw in self.store.load():
            line = CartLine.from_dict(raw)
            if line:
                self._lines.append(line)

    @property
    def lines(self) -> List[CartLine]:
        # Copies: les lignes internes ne changent que via add/update_quantity
        return [replace(line) for line in self._lines]

    def __len__(self) -> int:
        return len(self._lines)

    def __bool__(self) -> bool:
        return bool(self._lines)

    def get(self, product_id: str) -> Optional[CartLine]:
        line = self._find(product_id)
        return replace(line) if line else None

    def _find(self, product_id: str) -> Optional[CartLine]:
        return next((line for line in self._lines if line.product_id == product_id), None)

    def add(self, product: Dict[str, Any], quantity: int = 1) -> CartLine:
        """
        Ajoute un produit {id, name|title, price}; fusionne par id si déjà présent.
        """
        if quantity < 1:
            raise ValueError("quantity must be >= 1")
        product_id = str(product.get("id") or "").strip()
        if not product_id:
            raise ValueError("product id is required")
        existing = self._find(product_id)
        if existing:
            existing.quantity += quantity
            line = existing
        else:
            line = CartLine(
                product_id=product_id,
                title=str(product.get("title") or product.get("name") or product_id),
                price=float(product.get("price") or 0),
                quantity=quantity,
            )
            self._lines.append(line)
        self._persist()
        return replace(line)

    def remove(self, product_id: str) -> None:
        self._lines = [line for line in self._lines if line.product_id != product_id]
        self._persist()

    def update_quantity(self, product_id: str, delta: int) -> None:
        # Plancher à 1: décrémenter une ligne à 1 ne fait rien
        line = self._find(product_id)
        if line is None:
            return
        line.quantity = max(1, line.quantity + delta)
        self._persist()

    def clear(self) -> None:
        self._lines = []
        self.store.clear()

    def totals(self) -> OrderTotals:
        return compute_totals(self._lines)

    def _persist(self) -> None:
        self.store.save([line.to_dict() for line in self._lines])
