"""Tests for the cart and lunch pricing engine"""

from datetime import datetime

import pytest

from storefront.errors import ItemUnavailableError, NotFoundError, ValidationError
from storefront.menu import catalog
from storefront.schemas.cart import Cart, CartLine
from storefront.services.availability import AvailabilityRegistry
from storefront.services.pricing import BONUS_COMMENT, LunchRules, is_bonus_line

from conftest import AFTERNOON, LUNCHTIME


def test_lunch_window_boundaries():
    rules = LunchRules()

    # 10:29 and 10:30 Stockholm (UTC+2 in October)
    assert not rules.is_active(datetime(2026, 10, 20, 8, 29))
    assert rules.is_active(datetime(2026, 10, 20, 8, 30))
    # 13:59 and 14:00
    assert rules.is_active(datetime(2026, 10, 20, 11, 59))
    assert not rules.is_active(datetime(2026, 10, 20, 12, 0))


def test_lunch_inactive_on_weekends():
    rules = LunchRules()

    # Saturday 2026-10-24, 12:00 Stockholm
    assert not rules.is_active(datetime(2026, 10, 24, 10, 0))


def test_lunch_follows_local_time_in_winter():
    rules = LunchRules()

    # Monday 2026-11-02, 10:30 Stockholm is 09:30 UTC after the DST switch
    assert rules.is_active(datetime(2026, 11, 2, 9, 30))
    assert not rules.is_active(datetime(2026, 11, 2, 9, 29))


@pytest.mark.parametrize(
    "item_id, qualifies",
    [
        ("1-margherita", True),
        ("53-oxfile", True),
        ("42-kebabpizza", True),
        ("59-grekisk-sallad", True),
        ("dryck-flaska-50cl", False),
        ("tillbehor-bearnaisesas", False),
    ],
)
def test_lunch_qualification(item_id, qualifies):
    assert LunchRules().qualifies(catalog.get(item_id)) is qualifies


def test_excluded_names_do_not_qualify():
    rules = LunchRules()
    item = catalog.get("1-margherita").model_copy(update={"name": "Trekronor"})

    assert not rules.qualifies(item)


def test_grill_items_qualify_without_number():
    rules = LunchRules()
    item = catalog.get("dryck-burk-33cl").model_copy(update={"name": "Grilltallrik", "category": "Grill"})

    assert rules.qualifies(item)


@pytest.mark.asyncio
async def test_lunch_reprices_and_adds_bonus(cart_engine):
    """Scenario: Kebabpizza at 12:00 on a Tuesday costs 130 and earns a soda"""
    cart = Cart()
    await cart_engine.add_line(cart, "42-kebabpizza", "extra sås")

    priced = cart_engine.price(cart, LUNCHTIME)

    assert priced.lunch_active
    assert len(priced.lines) == 2
    pizza, soda = priced.lines
    assert pizza.unit_price == 130
    assert pizza.base_price == 150
    assert pizza.lunch_deal
    assert soda.is_bonus
    assert soda.item_id == "dryck-burk-33cl"
    assert soda.unit_price == 0
    assert soda.comment == BONUS_COMMENT
    assert priced.total == 130


@pytest.mark.asyncio
async def test_one_bonus_per_qualifying_line(cart_engine):
    cart = Cart()
    await cart_engine.add_line(cart, "1-margherita")
    await cart_engine.add_line(cart, "53-oxfile")
    await cart_engine.add_line(cart, "dryck-flaska-50cl")

    priced = cart_engine.price(cart, LUNCHTIME)

    bonus = [line for line in priced.lines if line.is_bonus]
    assert len(bonus) == 2
    assert priced.total == 130 + 130 + 25


@pytest.mark.asyncio
async def test_outside_lunch_prices_are_catalog_prices(cart_engine):
    cart = Cart()
    await cart_engine.add_line(cart, "42-kebabpizza")

    priced = cart_engine.price(cart, AFTERNOON)

    assert not priced.lunch_active
    assert [line.unit_price for line in priced.lines] == [150]
    assert priced.total == 150


@pytest.mark.asyncio
async def test_pricing_is_deterministic(cart_engine):
    cart = Cart()
    await cart_engine.add_line(cart, "1-margherita")
    await cart_engine.add_line(cart, "2-vesuvio")

    assert cart_engine.price(cart, LUNCHTIME) == cart_engine.price(cart, LUNCHTIME)


@pytest.mark.asyncio
async def test_bonus_lines_cannot_be_edited(cart_engine):
    cart = Cart()
    await cart_engine.add_line(cart, "1-margherita")
    bonus_id = cart_engine.price(cart, LUNCHTIME).lines[-1].line_id

    assert is_bonus_line(bonus_id)
    assert not cart_engine.remove_line(cart, bonus_id)
    assert not cart_engine.set_comment(cart, bonus_id, "no soda")


@pytest.mark.asyncio
async def test_client_supplied_bonus_lines_are_ignored(cart_engine):
    cart = Cart(lines=[CartLine(line_id="lunch-bonus-0", item_id="dryck-burk-33cl")])

    priced = cart_engine.price(cart, AFTERNOON)

    assert priced.lines == []
    assert priced.total == 0


@pytest.mark.asyncio
async def test_remove_and_comment(cart_engine):
    cart = Cart()
    first = await cart_engine.add_line(cart, "1-margherita")
    second = await cart_engine.add_line(cart, "2-vesuvio")

    assert cart_engine.set_comment(cart, second, "utan lök")
    assert cart_engine.remove_line(cart, first)
    assert not cart_engine.remove_line(cart, "missing")

    assert [(line.item_id, line.comment) for line in cart.lines] == [("2-vesuvio", "utan lök")]


@pytest.mark.asyncio
async def test_add_unknown_item(cart_engine):
    with pytest.raises(NotFoundError):
        await cart_engine.add_line(Cart(), "99-nope")


@pytest.mark.asyncio
async def test_add_unavailable_item(test_db, cart_engine):
    await AvailabilityRegistry(test_db).set_availability("1-margherita", False)

    cart = Cart()
    with pytest.raises(ItemUnavailableError):
        await cart_engine.add_line(cart, "1-margherita")

    assert cart.lines == []


@pytest.mark.asyncio
async def test_checkout_validation_catches_stock_change(test_db, cart_engine):
    """An item marked unavailable after it was added blocks checkout"""
    cart = Cart()
    await cart_engine.add_line(cart, "1-margherita")
    await AvailabilityRegistry(test_db).set_availability("1-margherita", False)

    with pytest.raises(ItemUnavailableError) as exc_info:
        await cart_engine.validate_for_checkout(cart)

    assert exc_info.value.item_ids == ["1-margherita"]


@pytest.mark.asyncio
async def test_checkout_validation_rejects_empty_cart(cart_engine):
    with pytest.raises(ValidationError):
        await cart_engine.validate_for_checkout(Cart())
