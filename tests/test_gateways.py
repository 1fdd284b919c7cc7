"""Tests for SMS gateways, the Stripe processor and the cleanup job"""

from datetime import datetime, timedelta
from urllib.parse import parse_qs
import time

import httpx
import pytest
from sqlalchemy import select

from storefront.errors import NotificationError, WebhookSignatureError
from storefront.jobs.tasks import purge_pending_orders
from storefront.models.order import Order
from storefront.notifications import ElksGateway, TwilioGateway, get_notification_gateway
from storefront.payments import StripePaymentProcessor

from conftest import sign_payload


def elks_transport(status_code=200, body=None, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=body if body is not None else {"id": "s1234", "status": "created"})

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_elks_sends_form_encoded_message():
    seen = []
    gateway = ElksGateway("user", "secret", "IlForno", "https://api.46elks.test/a1/sms", elks_transport(seen=seen))

    message_id = await gateway.send("+46701234567", "Order #1: ✅ Din order är klar att hämta. Välkommen!")

    assert message_id == "s1234"
    form = parse_qs(seen[0].content.decode())
    assert form["to"] == ["+46701234567"]
    assert form["from"] == ["IlForno"]
    assert seen[0].headers["authorization"].startswith("Basic ")


@pytest.mark.asyncio
async def test_elks_error_status_raises():
    gateway = ElksGateway("user", "secret", "IlForno", "https://api.46elks.test/a1/sms", elks_transport(status_code=401))

    with pytest.raises(NotificationError):
        await gateway.send("+46701234567", "hello")


@pytest.mark.asyncio
async def test_twilio_requires_configuration():
    gateway = TwilioGateway()
    gateway.account_sid = ""

    with pytest.raises(NotificationError):
        await gateway.send("+46701234567", "hello")


@pytest.mark.asyncio
async def test_twilio_transport_error_becomes_notification_error(twilio_network_down):
    gateway = TwilioGateway("ACxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxx", "token", "+46100000000")

    with pytest.raises(NotificationError) as exc_info:
        await gateway.send("+46701234567", "hello")

    assert "network down" in exc_info.value.detail


def test_gateway_factory():
    assert isinstance(get_notification_gateway("twilio"), TwilioGateway)
    assert isinstance(get_notification_gateway("46elks"), ElksGateway)

    with pytest.raises(ValueError):
        get_notification_gateway("pigeon")


def test_stripe_verify_event_accepts_valid_signature():
    processor = StripePaymentProcessor(api_key="sk_test", webhook_secret="whsec_abc")
    payload = '{"id": "evt_1", "type": "checkout.session.completed"}'

    event = processor.verify_event(payload.encode(), sign_payload(payload, secret="whsec_abc"))

    assert event["type"] == "checkout.session.completed"


def test_stripe_verify_event_rejects_stale_signature():
    processor = StripePaymentProcessor(api_key="sk_test", webhook_secret="whsec_abc")
    payload = '{"id": "evt_1", "type": "checkout.session.completed"}'
    stale = int(time.time()) - 3600

    with pytest.raises(WebhookSignatureError):
        processor.verify_event(payload.encode(), sign_payload(payload, secret="whsec_abc", timestamp=stale))


@pytest.mark.asyncio
async def test_purge_pending_orders(test_db, make_order):
    now = datetime(2026, 10, 20, 12, 0)
    stale = await make_order(paid=False, created_at=now - timedelta(hours=30))
    fresh = await make_order(paid=False, created_at=now - timedelta(hours=2))
    old_paid = await make_order(created_at=now - timedelta(days=3), paid_at=now - timedelta(days=3))

    deleted = await purge_pending_orders(test_db, now, retention_hours=24)

    assert deleted == 1
    result = await test_db.execute(select(Order.id))
    remaining = set(result.scalars().all())
    assert stale.id not in remaining
    assert remaining == {fresh.id, old_paid.id}
