import random

import httpx
import pytest

from storefront.cart import Cart
from storefront.checkout import (
    CheckoutSession,
    CheckoutStatus,
    OrderCompletion,
    PaymentMethod,
    PaymentResult,
    StorefrontApiClient,
)
from storefront.errors import UpstreamError


class FakeNotifier:
    def __init__(self, error=None):
        self.payloads = []
        self.error = error

    def notify_order(self, payload):
        self.payloads.append(payload)
        if self.error:
            raise self.error


class FakePayments:
    def __init__(self, result=None):
        self.calls = []
        self.result = result or PaymentResult.redirect("https://yoomoney.test/confirm/1")
        self.on_call = None

    def create_payment(self, amount, order_id, description):
        self.calls.append({"amount": amount, "order_id": order_id, "description": description})
        if self.on_call:
            self.on_call()
        return self.result


class FakeNavigator:
    def __init__(self):
        self.redirects = []
        self.routes = []

    def redirect(self, url):
        self.redirects.append(url)

    def navigate(self, route):
        self.routes.append(route)


class FakeScheduler:
    def __init__(self):
        self.calls = []

    def __call__(self, delay, fn):
        self.calls.append((delay, fn))

    def run_all(self):
        calls, self.calls = self.calls, []
        for _, fn in calls:
            fn()


@pytest.fixture
def cart():
    c = Cart()
    c.add({"id": "s1", "name": "S1 Цитрусовый бодряк", "price": 1900})
    c.add({"id": "m4", "name": "M4 Офисный набор", "price": 3800}, quantity=2)
    return c


@pytest.fixture
def parts():
    return {
        "notifier": FakeNotifier(),
        "payments": FakePayments(),
        "navigator": FakeNavigator(),
        "scheduler": FakeScheduler(),
        "completions": [],
        "statuses": [],
    }


def _session(cart, parts, **kwargs):
    session = CheckoutSession(
        cart=cart,
        notifier=parts["notifier"],
        payments=parts["payments"],
        navigator=parts["navigator"],
        on_order_complete=parts["completions"].append,
        scheduler=parts["scheduler"],
        order_reference=lambda: 1700000000000,
        rng=random.Random(0),
        **kwargs,
    )
    session.subscribe(parts["statuses"].append)
    return session


def _fill(session, method=PaymentMethod.CARD):
    session.update("name", "Анна Смирнова")
    session.update("phone", "+7 (999) 123-45-67")
    session.update("email", "anna@example.com")
    session.update("address", "Москва, ул. Тверская, 7")
    session.update("delivery_time", "5 марта, 13:00")
    session.update("payment_method", method)
    session.update("agreement", True)


def test_unchecked_agreement_fails_fast_without_calls(cart, parts):
    session = _session(cart, parts)
    _fill(session)
    session.update("agreement", False)

    assert session.submit() == CheckoutStatus.ERROR
    assert "agreement" in session.errors
    assert parts["notifier"].payloads == []
    assert parts["payments"].calls == []
    assert parts["navigator"].redirects == [] and parts["navigator"].routes == []
    assert "name" in session.touched and "agreement" in session.touched


def test_empty_cart_fails_fast(parts):
    session = _session(Cart(), parts)
    _fill(session)
    assert session.submit() == CheckoutStatus.ERROR
    assert "cart" in session.errors
    assert parts["notifier"].payloads == [] and parts["payments"].calls == []


def test_card_success_redirects_once_and_stays_put(cart, parts):
    session = _session(cart, parts)
    _fill(session, PaymentMethod.CARD)

    status = session.submit()

    assert parts["navigator"].redirects == ["https://yoomoney.test/confirm/1"]
    assert parts["navigator"].routes == []
    assert status == CheckoutStatus.LOADING
    assert parts["statuses"] == [CheckoutStatus.VALIDATING, CheckoutStatus.LOADING]
    assert session.redirected_to == "https://yoomoney.test/confirm/1"
    assert parts["completions"] == []
    assert parts["scheduler"].calls == []

    call = parts["payments"].calls[0]
    assert call["amount"] == 1900 + 2 * 3800  # livraison offerte
    assert call["order_id"] == 1700000000000
    assert call["description"] == "S1 Цитрусовый бодряк x1, M4 Офисный набор x2"


def test_card_total_includes_shipping_below_threshold(parts):
    small = Cart()
    small.add({"id": "s3", "name": "S3", "price": 1800})
    session = _session(small, parts)
    _fill(session)
    session.submit()
    assert parts["payments"].calls[0]["amount"] == 2100


def test_card_failure_goes_idle_and_to_fail_route(cart, parts):
    parts["payments"].result = PaymentResult.failure("status 500")
    session = _session(cart, parts)
    _fill(session)

    assert session.submit() == CheckoutStatus.IDLE
    assert parts["navigator"].routes == ["/fail"]
    assert parts["navigator"].redirects == []
    assert parts["statuses"] == [CheckoutStatus.VALIDATING, CheckoutStatus.LOADING, CheckoutStatus.IDLE]


def test_cash_order_completes_locally(cart, parts):
    session = _session(cart, parts)
    _fill(session, PaymentMethod.CASH)

    assert session.submit() == CheckoutStatus.SUCCESS
    assert parts["statuses"] == [CheckoutStatus.VALIDATING, CheckoutStatus.LOADING, CheckoutStatus.SUCCESS]
    assert parts["payments"].calls == []
    assert len(parts["completions"]) == 1
    completion = parts["completions"][0]
    assert isinstance(completion, OrderCompletion)
    assert completion.name == "Анна"
    assert completion.city == "Москва"
    assert completion.product in ("S1 Цитрусовый бодряк", "M4 Офисный набор")


def test_cash_success_resets_to_idle_after_delay(cart, parts):
    session = _session(cart, parts, reset_delay=3.0)
    _fill(session, PaymentMethod.CASH)
    session.submit()

    assert [delay for delay, _ in parts["scheduler"].calls] == [3.0]
    parts["scheduler"].run_all()

    assert session.status == CheckoutStatus.IDLE
    assert session.form.name == ""
    assert session.form.payment_method == PaymentMethod.CARD
    assert session.form.agreement is False
    assert session.touched == set()
    assert len(parts["completions"]) == 1


def test_notification_failure_never_blocks_payment(cart, parts):
    parts["notifier"].error = UpstreamError("Telegram send error", status=500)
    session = _session(cart, parts)
    _fill(session)

    session.submit()

    assert session.notification_failed is True
    assert len(parts["payments"].calls) == 1
    assert parts["navigator"].redirects == ["https://yoomoney.test/confirm/1"]


def test_unexpected_notification_error_never_blocks_payment(cart, parts):
    parts["notifier"].error = AttributeError("'str' object has no attribute 'get'")
    session = _session(cart, parts)
    _fill(session)

    assert session.submit() == CheckoutStatus.LOADING
    assert session.notification_failed is True
    assert len(parts["payments"].calls) == 1
    assert parts["navigator"].redirects == ["https://yoomoney.test/confirm/1"]


def test_non_object_error_body_from_send_lead_does_not_block_payment(cart, parts):
    def _handler(request):
        if request.url.path == "/api/send-lead":
            return httpx.Response(502, json="Bad gateway")
        return httpx.Response(200, json={"confirmation_url": "https://yoomoney.test/confirm/2"})

    api = StorefrontApiClient(httpx.Client(base_url="http://shop.test", transport=httpx.MockTransport(_handler)))
    parts["notifier"] = api
    parts["payments"] = api
    session = _session(cart, parts)
    _fill(session)

    session.submit()

    assert session.notification_failed is True
    assert parts["navigator"].redirects == ["https://yoomoney.test/confirm/2"]


def test_notify_order_tolerates_non_object_error_body():
    transport = httpx.MockTransport(lambda request: httpx.Response(502, json="Bad gateway"))
    api = StorefrontApiClient(httpx.Client(base_url="http://shop.test", transport=transport))
    with pytest.raises(UpstreamError) as exc:
        api.notify_order({"type": "Order", "phone": "+79991234567"})
    assert exc.value.upstream_status == 502


def test_notification_payload(cart, parts):
    session = _session(cart, parts)
    _fill(session, PaymentMethod.CASH)
    session.update("comment", "Домофон 12")
    session.submit()

    payload = parts["notifier"].payloads[0]
    assert payload["type"] == "Order"
    assert payload["name"] == "Анна Смирнова"
    assert payload["deliveryTime"] == "5 марта, 13:00"
    assert payload["comment"] == "Домофон 12"
    assert payload["cart"] == [
        {"title": "S1 Цитрусовый бодряк", "quantity": 1, "price": 1900.0},
        {"title": "M4 Офисный набор", "quantity": 2, "price": 3800.0},
    ]


def test_missing_notifier_is_skipped(cart, parts):
    parts["notifier"] = None
    session = _session(cart, parts)
    _fill(session, PaymentMethod.CASH)
    assert session.submit() == CheckoutStatus.SUCCESS
    assert session.notification_failed is False


def test_only_one_submission_in_flight(cart, parts):
    session = _session(cart, parts)
    _fill(session)
    nested = []
    parts["payments"].on_call = lambda: nested.append(session.submit())

    session.submit()

    assert nested == [CheckoutStatus.LOADING]
    assert len(parts["payments"].calls) == 1
    assert len(parts["notifier"].payloads) == 1
    assert session.can_submit is False


def test_blur_validates_single_field(cart, parts):
    session = _session(cart, parts)
    session.update("phone", "12")
    assert session.blur("phone") is not None
    assert "phone" in session.errors and "phone" in session.touched
    session.update("phone", "+79991234567")
    assert "phone" not in session.errors
    assert session.blur("phone") is None


def test_error_state_recovers_on_resubmit(cart, parts):
    session = _session(cart, parts)
    _fill(session, PaymentMethod.CASH)
    session.update("name", "")
    assert session.submit() == CheckoutStatus.ERROR
    session.update("name", "Олег")
    assert "name" not in session.errors
    assert session.submit() == CheckoutStatus.SUCCESS


def test_delivery_picker_feeds_the_form(cart, parts):
    from datetime import date, timedelta
    session = _session(cart, parts)
    session.errors["delivery_time"] = "required"
    day = date.today() + timedelta(days=1)
    session.delivery_picker.select_date(day)
    session.delivery_picker.select_time("15:00")
    assert session.form.delivery_time.endswith(", 15:00")
    assert "delivery_time" not in session.errors


def test_unsubscribe_stops_notifications(cart, parts):
    session = _session(cart, parts)
    seen = []
    unsubscribe = session.subscribe(seen.append)
    unsubscribe()
    _fill(session, PaymentMethod.CASH)
    session.submit()
    assert seen == []


def test_unknown_field_update_raises(cart, parts):
    session = _session(cart, parts)
    with pytest.raises(AttributeError):
        session.update("coupon", "X")
