"""
Machine à états du checkout.

États: idle -> validating -> {loading | error} -> {success -> idle | error}
- Une seule soumission en vol par session: le statut loading désactive submit().
- Les changements de statut sont publiés aux abonnés (subscribe), jamais sondés.
- Carte: la redirection vers la passerelle est terminale, aucune transition locale ensuite.
"""
import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol, Set

import httpx

from storefront import config
from storefront.cart import Cart, compute_totals, describe_lines
from storefront.errors import StorefrontError
from .client import LeadNotifier, PaymentInitiator, PaymentResult
from .delivery import DeliverySlotPicker, Scheduler, thread_timer
from .form import TOUCHABLE_FIELDS, CheckoutForm, PaymentMethod, validate_field, validate_form

logger = logging.getLogger(__name__)

# module storefront.checkout.session
class CheckoutStatus(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class OrderCompletion:
    """Données transmises au rappel de fin de commande (preuve sociale)."""
    name: str
    city: str
    product: str


class Navigator(Protocol):
    def redirect(self, url: str) -> None: ...
    def navigate(self, route: str) -> None: ...


StatusListener = Callable[[CheckoutStatus], None]


def _default_order_reference() -> int:
    return int(time.time() * 1000)


class CheckoutSession:
    def __init__(
        self,
        cart: Cart,
        notifier: Optional[LeadNotifier],
        payments: PaymentInitiator,
        navigator: Navigator,
        on_order_complete: Optional[Callable[[OrderCompletion], None]] = None,
        scheduler: Scheduler = thread_timer,
        order_reference: Callable[[], Any] = _default_order_reference,
        rng: Optional[random.Random] = None,
        reset_delay: float = config.SUCCESS_RESET_DELAY_SECONDS,
        city: str = config.DEFAULT_CITY,
    ):
        self.cart = cart
        self.notifier = notifier
        self.payments = payments
        self.navigator = navigator
        self.on_order_complete = on_order_complete
        self._scheduler = scheduler
        self._order_reference = order_reference
        self._rng = rng or random.Random()
        self.reset_delay = reset_delay
        self.city = city

        self.form = CheckoutForm()
        self.errors: Dict[str, str] = {}
        self.touched: Set[str] = set()
        self.status = CheckoutStatus.IDLE
        self.notification_failed = False
        self.redirected_to: Optional[str] = None
        self._listeners: List[StatusListener] = []
        self._reset_handle = None
        self.delivery_picker = DeliverySlotPicker(on_change=self._on_delivery_selected, scheduler=scheduler)

    # --- Observation du statut ---

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """Abonne listener aux changements de statut; retourne la fonction de désabonnement."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return _unsubscribe

    def _set_status(self, status: CheckoutStatus) -> None:
        if status == self.status:
            return
        self.status = status
        for listener in list(self._listeners):
            listener(status)

    @property
    def can_submit(self) -> bool:
        return self.status != CheckoutStatus.LOADING

    # --- Saisie ---

    def update(self, field: str, value: Any) -> None:
        """Modifie un champ et efface son erreur éventuelle (comme à la frappe)."""
        if not hasattr(self.form, field):
            raise AttributeError(f"Unknown checkout field: {field}")
        if field == "payment_method":
            value = PaymentMethod(value)
        setattr(self.form, field, value)
        self.errors.pop(field, None)

    def blur(self, field: str) -> Optional[str]:
        """Marque le champ comme touché et le valide; retourne l'erreur éventuelle."""
        self.touched.add(field)
        error = validate_field(field, getattr(self.form, field))
        if error:
            self.errors[field] = error
        else:
            self.errors.pop(field, None)
        return error

    def _on_delivery_selected(self, value: str) -> None:
        self.form.delivery_time = value
        self.errors.pop("delivery_time", None)

    # --- Soumission ---

    def submit(self) -> CheckoutStatus:
        """
        Soumet la commande.
        1) rejet silencieux si une soumission est déjà en vol (statut loading)
        2) validation exhaustive; en cas d'échec statut error et aucun appel réseau
        3) notification de la commande (un échec lève seulement notification_failed)
        4) carte: création du paiement puis redirection ou route d'échec; espèces: succès local
        """
        if not self.can_submit:
            logger.debug("checkout.submit ignored: submission already in flight")
            return self.status

        self.touched.update(TOUCHABLE_FIELDS)
        self._cancel_reset()
        self._set_status(CheckoutStatus.VALIDATING)
        errors = validate_form(self.form, self.cart.lines)
        if errors:
            self.errors.update(errors)
            self._set_status(CheckoutStatus.ERROR)
            return self.status

        self._set_status(CheckoutStatus.LOADING)
        self._dispatch_notification()

        if self.form.payment_method == PaymentMethod.CARD:
            result = self._initiate_payment()
            self._after_payment(result)
            return self.status

        self._complete_cash_order()
        return self.status

    def _dispatch_notification(self) -> None:
        self.notification_failed = False
        if self.notifier is None:
            logger.info("checkout.notify skipped: no notifier configured")
            return
        try:
            self.notifier.notify_order(self._lead_payload())
        except (StorefrontError, httpx.HTTPError) as e:
            self.notification_failed = True
            logger.warning("checkout.notify failed, continuing checkout error=%s", e)
        except Exception:
            # Une notification en échec ne bloque jamais le paiement
            self.notification_failed = True
            logger.exception("checkout.notify unexpected error, continuing checkout")

    def _lead_payload(self) -> Dict[str, Any]:
        return {
            "type": "Order",
            "name": self.form.name,
            "phone": self.form.phone,
            "email": self.form.email,
            "address": self.form.address,
            "deliveryTime": self.form.delivery_time,
            "comment": self.form.comment or "",
            "cart": [
                {"title": line.title, "quantity": line.quantity, "price": line.price}
                for line in self.cart.lines
            ],
        }

    def _initiate_payment(self) -> PaymentResult:
        lines = self.cart.lines
        totals = compute_totals(lines)
        return self.payments.create_payment(
            amount=totals.total,
            order_id=self._order_reference(),
            description=describe_lines(lines),
        )

    def _after_payment(self, result: PaymentResult) -> None:
        # Point de décision unique de navigation après la passerelle
        if result.ok:
            self.redirected_to = result.redirect_url
            self.navigator.redirect(result.redirect_url)
            return
        logger.error("checkout.payment failed reason=%s", result.reason)
        self._set_status(CheckoutStatus.IDLE)
        self.navigator.navigate(config.FAIL_ROUTE)

    def _complete_cash_order(self) -> None:
        self._set_status(CheckoutStatus.SUCCESS)
        lines = self.cart.lines
        sampled = self._rng.choice(lines)
        if self.on_order_complete:
            self.on_order_complete(OrderCompletion(
                name=self.form.first_name,
                city=self.city,
                product=sampled.title,
            ))
        self._reset_handle = self._scheduler(self.reset_delay, self.reset)

    # --- Réinitialisation ---

    def reset(self) -> None:
        """Remet le formulaire à zéro et le statut à idle (après l'affichage du succès)."""
        self._cancel_reset()
        self.form = CheckoutForm()
        self.errors = {}
        self.touched = set()
        self.notification_failed = False
        self.delivery_picker.clear()
        self._set_status(CheckoutStatus.IDLE)

    def _cancel_reset(self) -> None:
        handle = self._reset_handle
        self._reset_handle = None
        if handle is not None and hasattr(handle, "cancel"):
            handle.cancel()
