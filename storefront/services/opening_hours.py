"""Ordering window"""

from datetime import datetime, time
from typing import Dict, NamedTuple

from storefront.config import settings
from storefront.errors import OrderingClosedError
from storefront.services.pricing import to_local


class DayHours(NamedTuple):
    open: time
    close: time


# Monday == 0
WEEKLY_HOURS: Dict[int, DayHours] = {
    0: DayHours(time(10, 30), time(21, 0)),
    1: DayHours(time(10, 30), time(21, 0)),
    2: DayHours(time(10, 30), time(21, 0)),
    3: DayHours(time(10, 30), time(21, 0)),
    4: DayHours(time(10, 30), time(21, 0)),
    5: DayHours(time(11, 30), time(21, 0)),
    6: DayHours(time(11, 30), time(21, 0)),
}

LAST_ORDER_TIME = time(20, 45)


def _fmt(value: time) -> str:
    return value.strftime("%H:%M")


class OpeningHours:
    """Opening hours with a last-order cutoff before closing"""

    def __init__(
        self,
        hours: Dict[int, DayHours] = WEEKLY_HOURS,
        last_order: time = LAST_ORDER_TIME,
        timezone: str = settings.restaurant_timezone,
    ):
        self.hours = hours
        self.last_order = last_order
        self.timezone = timezone

    def _local(self, now: datetime):
        local = to_local(now, self.timezone)
        return local, local.time().replace(second=0, microsecond=0)

    def is_order_open(self, now: datetime) -> bool:
        local, current = self._local(now)
        today = self.hours[local.weekday()]
        return today.open <= current < self.last_order

    def ordering_message(self, now: datetime) -> str:
        local, current = self._local(now)
        today = self.hours[local.weekday()]

        if current < today.open:
            return f"Stängt för beställning. Öppnar kl {_fmt(today.open)}."

        if current >= self.last_order:
            if current < today.close:
                return f"Stängt för beställning efter kl {_fmt(self.last_order)}."
            tomorrow = self.hours[(local.weekday() + 1) % 7]
            return f"Stängt just nu. Öppnar imorgon kl {_fmt(tomorrow.open)}."

        return f"Öppet för beställning. Sista beställning kl {_fmt(self.last_order)}."

    def ensure_open(self, now: datetime) -> None:
        if not self.is_order_open(now):
            raise OrderingClosedError(self.ordering_message(now))
