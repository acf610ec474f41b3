"""
Données du formulaire de commande et règles de validation par champ.
"""
import re
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Iterable, Optional

PHONE_RE = re.compile(r"^\+?[0-9]{10,15}$")
PHONE_PUNCTUATION_RE = re.compile(r"[\s()\-]")
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Champs validés à la soumission (email: seulement s'il est renseigné)
REQUIRED_FIELDS = ("name", "phone", "address", "delivery_time")
TOUCHABLE_FIELDS = ("name", "phone", "email", "address", "delivery_time", "agreement")

MESSAGES = {
    "name": "Введите ваше имя (минимум 2 символа)",
    "phone_required": "Укажите телефон для связи",
    "phone": "Неверный формат телефона",
    "email": "Неверный формат email",
    "address": "Введите полный адрес доставки",
    "delivery_time": "Выберите дату и время доставки",
    "agreement": "Необходимо согласие с условиями",
    "cart": "Добавьте товары в корзину",
}

# module storefront.checkout.form
class PaymentMethod(str, Enum):
    CARD = "card"
    CASH = "cash"


@dataclass
class CheckoutForm:
    name: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    delivery_time: str = ""
    comment: str = ""
    payment_method: PaymentMethod = PaymentMethod.CARD
    agreement: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @property
    def first_name(self) -> str:
        parts = self.name.strip().split()
        return parts[0] if parts else ""


def normalize_phone(value: str) -> str:
    return PHONE_PUNCTUATION_RE.sub("", value or "")

def validate_field(field: str, value: Any) -> Optional[str]:
    """
    Valide un champ et retourne le message d'erreur, ou None si valide.
    Les champs sans règle (comment, payment_method) sont toujours valides.
    """
    if field == "name":
        if not value or len(str(value).strip()) < 2:
            return MESSAGES["name"]
    elif field == "phone":
        if not value:
            return MESSAGES["phone_required"]
        if not PHONE_RE.match(normalize_phone(str(value))):
            return MESSAGES["phone"]
    elif field == "email":
        if value and not EMAIL_RE.match(str(value)):
            return MESSAGES["email"]
    elif field == "address":
        if not value or len(str(value).strip()) < 5:
            return MESSAGES["address"]
    elif field == "delivery_time":
        if not value:
            return MESSAGES["delivery_time"]
    elif field == "agreement":
        if value is not True:
            return MESSAGES["agreement"]
    return None

def validate_form(form: CheckoutForm, cart_lines: Iterable[Any]) -> Dict[str, str]:
    """
    Validation exhaustive avant soumission.
    Retourne {champ: message}; dict vide si le formulaire peut être soumis.
    """
    errors: Dict[str, str] = {}
    for field in REQUIRED_FIELDS:
        error = validate_field(field, getattr(form, field))
        if error:
            errors[field] = error
    if form.email:
        error = validate_field("email", form.email)
        if error:
            errors["email"] = error
    error = validate_field("agreement", form.agreement)
    if error:
        errors["agreement"] = error
    if not list(cart_lines):
        errors["cart"] = MESSAGES["cart"]
    return errors
