import pytest

from storefront.cart import CartLine
from storefront.checkout import CheckoutForm, normalize_phone, validate_field, validate_form

CART = [CartLine(product_id="s1", title="S1", price=1900, quantity=1)]


def _valid_form(**overrides):
    data = dict(
        name="Иван Иванов",
        phone="+7 (999) 000-00-00",
        email="",
        address="ул. Ленина, 1",
        delivery_time="5 марта, 13:00",
        agreement=True,
    )
    data.update(overrides)
    return CheckoutForm(**data)


@pytest.mark.parametrize("value,ok", [
    ("Ян", True),
    ("  Я ", False),
    ("", False),
])
def test_name_rule(value, ok):
    assert (validate_field("name", value) is None) is ok


@pytest.mark.parametrize("value,ok", [
    ("+7 (999) 000-00-00", True),
    ("89990000000", True),
    ("+123456789012345", True),
    ("123456789", False),          # 9 chiffres
    ("+1234567890123456", False),  # 16 chiffres
    ("+7 999 abc 00 00", False),
    ("", False),
])
def test_phone_rule(value, ok):
    assert (validate_field("phone", value) is None) is ok


def test_phone_required_message_differs_from_format_message():
    assert validate_field("phone", "") != validate_field("phone", "12")


def test_normalize_phone_strips_punctuation():
    assert normalize_phone("+7 (999) 000-00-00") == "+79990000000"


@pytest.mark.parametrize("value,ok", [
    ("", True),
    ("ivan@example.com", True),
    ("ivan@example", False),
    ("ivan example@mail.ru", False),
])
def test_email_rule(value, ok):
    assert (validate_field("email", value) is None) is ok


def test_address_and_slot_rules():
    assert validate_field("address", "ул. 1") is None
    assert validate_field("address", "ул.") is not None
    assert validate_field("delivery_time", "") is not None
    assert validate_field("delivery_time", "5 марта, 13:00") is None


def test_unknown_field_is_always_valid():
    assert validate_field("comment", "") is None


def test_valid_form_has_no_errors():
    assert validate_form(_valid_form(), CART) == {}


def test_agreement_and_cart_are_required():
    errors = validate_form(_valid_form(agreement=False), [])
    assert set(errors) == {"agreement", "cart"}


def test_invalid_email_is_reported_only_when_present():
    assert "email" in validate_form(_valid_form(email="bad"), CART)
    assert "email" not in validate_form(_valid_form(email=""), CART)


def test_first_name():
    assert _valid_form(name="  Анна Петровна ").first_name == "Анна"
    assert CheckoutForm().first_name == ""
