"""
Cart and pricing engine.

Lunch deal: on weekdays inside the lunch window every qualifying line is
repriced to the fixed lunch price and earns one free canned soda. The soda
lines are a projection of the cart at a given instant; they are never part of
the cart the client holds, so pricing the same cart at the same instant always
yields the same lines.
"""

from datetime import datetime, time
from typing import Iterable, List, Optional, Sequence, Tuple
import uuid

import pytz
import structlog

from storefront.config import settings
from storefront.errors import ItemUnavailableError, NotFoundError, ValidationError
from storefront.menu import MenuCatalog, MenuItem, catalog as default_catalog
from storefront.menu.catalog import KEBAB, SALADS
from storefront.schemas.cart import Cart, CartLine, PricedCart, PricedLine
from storefront.services.availability import AvailabilityRegistry

logger = structlog.get_logger()

BONUS_LINE_PREFIX = "lunch-bonus-"
BONUS_COMMENT = "Ingår i lunchpaket"

EXCLUDED_PHRASES = ("trekronor", "tre kronor", "dubbelinbakad", "dubbel inbakad")


def parse_hhmm(value: str) -> time:
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def to_local(now: datetime, timezone: str) -> datetime:
    """Convert to the restaurant's civil time; naive values are UTC"""
    if now.tzinfo is None:
        now = pytz.utc.localize(now)
    return now.astimezone(pytz.timezone(timezone))


def is_bonus_line(line_id: str) -> bool:
    return line_id.startswith(BONUS_LINE_PREFIX)


class LunchRules:
    """Lunch window and item eligibility"""

    def __init__(
        self,
        price: int = 130,
        start: time = time(10, 30),
        end: time = time(14, 0),
        bonus_item_id: str = "dryck-burk-33cl",
        number_range: Tuple[int, int] = (1, 66),
        excluded_phrases: Sequence[str] = EXCLUDED_PHRASES,
        qualifying_categories: Iterable[str] = (KEBAB,),
        salad_number_range: Tuple[int, int] = (1, 8),
        timezone: str = "Europe/Stockholm",
    ):
        self.price = price
        self.start = start
        self.end = end
        self.bonus_item_id = bonus_item_id
        self.number_range = number_range
        self.excluded_phrases = tuple(excluded_phrases)
        self.qualifying_categories = frozenset(qualifying_categories)
        self.salad_number_range = salad_number_range
        self.timezone = timezone

    @classmethod
    def from_settings(cls, config=settings) -> "LunchRules":
        return cls(
            price=config.lunch_price,
            start=parse_hhmm(config.lunch_start),
            end=parse_hhmm(config.lunch_end),
            bonus_item_id=config.lunch_bonus_item_id,
            number_range=(config.lunch_number_min, config.lunch_number_max),
            timezone=config.restaurant_timezone,
        )

    def is_active(self, now: datetime) -> bool:
        """Weekday and local time in [start, end)"""
        local = to_local(now, self.timezone)
        if local.weekday() >= 5:
            return False
        return self.start <= local.time().replace(second=0, microsecond=0) < self.end

    def qualifies(self, item: MenuItem) -> bool:
        name = item.name.lower()
        category = item.category.lower()
        number = item.number

        low, high = self.number_range
        numbered = number is not None and low <= number <= high
        excluded = any(phrase in name for phrase in self.excluded_phrases)
        if numbered and not excluded:
            return True

        if item.category in self.qualifying_categories:
            return True

        salad_low, salad_high = self.salad_number_range
        if item.category == SALADS and number is not None and salad_low <= number <= salad_high:
            return True

        return any(word in text for word in ("grill", "hamburg") for text in (name, category))


class CartEngine:
    """Builds and prices carts against the catalog and stock flags"""

    def __init__(
        self,
        availability: AvailabilityRegistry,
        catalog: MenuCatalog = default_catalog,
        lunch: Optional[LunchRules] = None,
    ):
        self.availability = availability
        self.catalog = catalog
        self.lunch = lunch or LunchRules.from_settings()

    async def add_line(self, cart: Cart, item_id: str, comment: str = "") -> str:
        """Append a line for ``item_id`` and return its line id"""
        if self.catalog.get(item_id) is None:
            raise NotFoundError(f"Unknown menu item: {item_id}")

        if not await self.availability.is_available(item_id):
            raise ItemUnavailableError(
                [item_id],
                message="This item is not available right now.",
            )

        line_id = uuid.uuid4().hex
        cart.lines.append(CartLine(line_id=line_id, item_id=item_id, comment=comment))
        return line_id

    def remove_line(self, cart: Cart, line_id: str) -> bool:
        if is_bonus_line(line_id):
            return False
        before = len(cart.lines)
        cart.lines = [line for line in cart.lines if line.line_id != line_id]
        return len(cart.lines) != before

    def set_comment(self, cart: Cart, line_id: str, text: str) -> bool:
        if is_bonus_line(line_id):
            return False
        for line in cart.lines:
            if line.line_id == line_id:
                line.comment = text
                return True
        return False

    def real_lines(self, cart: Cart) -> List[CartLine]:
        """Customer lines, minus anything posing as a bonus line"""
        return [line for line in cart.lines if not is_bonus_line(line.line_id)]

    def price(self, cart: Cart, now: datetime) -> PricedCart:
        """Priced projection of ``cart`` at ``now``"""
        lunch_active = self.lunch.is_active(now)
        lines: List[PricedLine] = []

        for line in self.real_lines(cart):
            item = self.catalog.get(line.item_id)
            if item is None:
                logger.warning("Dropping cart line for unknown item", item_id=line.item_id)
                continue

            lunch_deal = lunch_active and self.lunch.qualifies(item)
            lines.append(
                PricedLine(
                    line_id=line.line_id,
                    item_id=item.id,
                    name=item.name,
                    comment=line.comment,
                    base_price=item.price,
                    unit_price=self.lunch.price if lunch_deal else item.price,
                    lunch_deal=lunch_deal,
                )
            )

        lines.extend(self._bonus_lines(lines))
        return PricedCart(lines=lines, total=self.compute_total(lines), lunch_active=lunch_active)

    def _bonus_lines(self, lines: List[PricedLine]) -> List[PricedLine]:
        deals = sum(1 for line in lines if line.lunch_deal)
        if not deals:
            return []

        soda = self.catalog.get(self.lunch.bonus_item_id)
        if soda is None:
            logger.warning("Lunch bonus item missing from catalog", item_id=self.lunch.bonus_item_id)
            return []

        return [
            PricedLine(
                line_id=f"{BONUS_LINE_PREFIX}{index}",
                item_id=soda.id,
                name=soda.name,
                comment=BONUS_COMMENT,
                base_price=soda.price,
                unit_price=0,
                is_bonus=True,
            )
            for index in range(deals)
        ]

    @staticmethod
    def compute_total(lines: Iterable[PricedLine]) -> int:
        return sum(line.unit_price for line in lines)

    async def validate_for_checkout(self, cart: Cart) -> None:
        """Re-check stock for every customer line"""
        lines = self.real_lines(cart)
        if not lines:
            raise ValidationError("Your cart is empty.")

        unknown = [line.item_id for line in lines if self.catalog.get(line.item_id) is None]
        if unknown:
            raise ValidationError("Your cart contains items that are no longer on the menu.", detail=", ".join(unknown))

        out_of_stock = await self.availability.unavailable_ids()
        blocked = sorted({line.item_id for line in lines if line.item_id in out_of_stock})
        if blocked:
            logger.info("Checkout blocked by unavailable items", item_ids=blocked)
            raise ItemUnavailableError(blocked)
