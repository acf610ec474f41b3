"""
Sélecteur de créneau de livraison: une date (au jour près, pas dans le passé)
et un créneau fixe de 2 heures, composés en une seule chaîne d'affichage.
"""
import calendar
import logging
import threading
from datetime import date
from typing import Any, Callable, Optional

from storefront.config import DELIVERY_PICKER_COLLAPSE_SECONDS
from storefront.errors import ValidationError

logger = logging.getLogger(__name__)

# 09:00, 11:00, ..., 21:00
TIME_SLOTS = tuple(f"{9 + 2 * i:02d}:00" for i in range(7))

MONTHS_GENITIVE = (
    "января", "февраля", "марта", "апреля", "мая", "июня",
    "июля", "августа", "сентября", "октября", "ноября", "декабря",
)

Scheduler = Callable[[float, Callable[[], None]], Any]

def thread_timer(delay: float, fn: Callable[[], None]) -> threading.Timer:
    """Planifie fn après delay secondes dans un thread daemon; retourne le Timer (annulable)."""
    timer = threading.Timer(delay, fn)
    timer.daemon = True
    timer.start()
    return timer

def format_slot(day: date, slot: str) -> str:
    return f"{day.day} {MONTHS_GENITIVE[day.month - 1]}, {slot}"

# module storefront.checkout.delivery
class DeliverySlotPicker:
    def __init__(
        self,
        on_change: Optional[Callable[[str], None]] = None,
        today: Callable[[], date] = date.today,
        scheduler: Scheduler = thread_timer,
        collapse_delay: float = DELIVERY_PICKER_COLLAPSE_SECONDS,
    ):
        self.on_change = on_change
        self._today = today
        self._scheduler = scheduler
        self.collapse_delay = collapse_delay
        self.selected_date: Optional[date] = None
        self.selected_time: Optional[str] = None
        self.expanded = False
        first = today().replace(day=1)
        self.current_month = first
        self._collapse_handle = None

    @property
    def value(self) -> str:
        if self.selected_date and self.selected_time:
            return format_slot(self.selected_date, self.selected_time)
        return ""

    def toggle(self) -> None:
        self.expanded = not self.expanded

    def change_month(self, delta: int) -> date:
        month_index = self.current_month.year * 12 + (self.current_month.month - 1) + delta
        self.current_month = date(month_index // 12, month_index % 12 + 1, 1)
        return self.current_month

    def days_in_month(self) -> int:
        return calendar.monthrange(self.current_month.year, self.current_month.month)[1]

    def first_weekday(self) -> int:
        """Jour de semaine du 1er du mois affiché, lundi=1 ... dimanche=7."""
        return self.current_month.isoweekday()

    def is_selectable(self, day: date) -> bool:
        return day >= self._today()

    def select_date(self, day: date) -> None:
        if not self.is_selectable(day):
            raise ValidationError("Нельзя выбрать прошедшую дату", field="delivery_time")
        self.selected_date = day
        self._compose()

    def select_time(self, slot: str) -> None:
        if slot not in TIME_SLOTS:
            raise ValidationError("Недоступное время доставки", field="delivery_time")
        self.selected_time = slot
        self._compose()

    def clear(self) -> None:
        self.selected_date = None
        self.selected_time = None
        self.expanded = False
        self._cancel_collapse()

    def _compose(self) -> None:
        value = self.value
        if not value:
            return
        if self.on_change:
            self.on_change(value)
        self._cancel_collapse()
        self._collapse_handle = self._scheduler(self.collapse_delay, self._collapse)

    def _collapse(self) -> None:
        self.expanded = False
        self._collapse_handle = None

    def _cancel_collapse(self) -> None:
        handle = self._collapse_handle
        self._collapse_handle = None
        if handle is not None and hasattr(handle, "cancel"):
            handle.cancel()
