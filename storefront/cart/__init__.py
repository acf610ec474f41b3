"""
Module 'cart': lignes, calcul des montants et persistance du panier.
"""

from .models import CartLine
from .totals import OrderTotals, compute_totals, describe_lines
from .store import CartStore, InMemoryCartStore, JsonFileCartStore
from .cart import Cart

__all__ = [
    "CartLine",
    "OrderTotals",
    "compute_totals",
    "describe_lines",
    "CartStore",
    "InMemoryCartStore",
    "JsonFileCartStore",
    "Cart",
]
