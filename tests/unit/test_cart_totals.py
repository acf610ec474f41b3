import random

import pytest

from storefront.cart import CartLine, compute_totals, describe_lines


def _line(price, qty, pid=None, title=None):
    pid = pid or f"p{price}-{qty}"
    return CartLine(product_id=pid, title=title or pid, price=price, quantity=qty)


def test_example_cart_reaches_free_shipping():
    totals = compute_totals([_line(1000, 1), _line(500, 2)])
    assert totals.subtotal == 2000
    assert totals.shipping == 0
    assert totals.total == 2000
    assert totals.remaining_for_free_shipping == 0
    assert totals.free_shipping is True
    assert totals.item_count == 3


def test_below_threshold_pays_flat_fee():
    totals = compute_totals([_line(1900, 1)])
    assert totals.subtotal == 1900
    assert totals.shipping == 300
    assert totals.total == 2200
    assert totals.free_shipping is False
    assert totals.remaining_for_free_shipping == 100


def test_threshold_is_inclusive():
    totals = compute_totals([_line(2000, 1)])
    assert totals.shipping == 0
    assert totals.remaining_for_free_shipping == 0


def test_empty_cart_still_pays_shipping():
    # Décision: subtotal 0 < seuil => frais fixes appliqués
    totals = compute_totals([])
    assert totals.subtotal == 0
    assert totals.shipping == 300
    assert totals.total == 300
    assert totals.remaining_for_free_shipping == 2000
    assert totals.progress_percent == 0
    assert totals.item_count == 0


def test_custom_threshold_and_fee():
    totals = compute_totals([_line(100, 3)], threshold=500, shipping_cost=50)
    assert totals.shipping == 50
    assert totals.total == 350
    assert totals.remaining_for_free_shipping == 200
    assert totals.progress_percent == pytest.approx(60.0)


def test_progress_is_capped_at_100():
    totals = compute_totals([_line(7500, 1)])
    assert totals.progress_percent == 100.0


def test_totals_invariants_on_random_carts():
    rng = random.Random(42)
    for _ in range(200):
        lines = [_line(rng.randint(0, 4000), rng.randint(1, 5), pid=f"p{i}") for i in range(rng.randint(0, 5))]
        totals = compute_totals(lines)
        assert totals.total == totals.subtotal + totals.shipping
        assert totals.shipping in (0, 300)
        if totals.subtotal >= 2000:
            assert totals.shipping == 0
            assert totals.remaining_for_free_shipping == 0
        else:
            assert totals.remaining_for_free_shipping == 2000 - totals.subtotal


def test_describe_lines():
    lines = [_line(1900, 2, title="S1 Цитрусовый бодряк"), _line(3500, 1, title="M1 Семейный классический")]
    assert describe_lines(lines) == "S1 Цитрусовый бодряк x2, M1 Семейный классический x1"


def test_cart_line_rejects_invalid_values():
    with pytest.raises(ValueError):
        CartLine(product_id="a", title="A", price=-1, quantity=1)
    with pytest.raises(ValueError):
        CartLine(product_id="a", title="A", price=10, quantity=0)
