"""Test configuration and fixtures"""

from datetime import datetime
import hashlib
import hmac
import json
import time

import pytest
from httpx import ASGITransport, AsyncClient
import requests
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from twilio.http.http_client import TwilioHttpClient

from storefront.main import app
from storefront.api import deps
from storefront.database import Base, get_db
from storefront.errors import NotificationError
from storefront.models.order import Order, OrderStatus
from storefront.notifications.base import BaseNotificationGateway
from storefront.payments.base import CheckoutSession
from storefront.payments.stripe import StripePaymentProcessor
from storefront.services.availability import AvailabilityRegistry
from storefront.services.pricing import CartEngine, LunchRules


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

WEBHOOK_SECRET = "whsec_test_secret"
ADMIN_PIN = "1234"

# Tuesday 2026-10-20, 15:00 in Stockholm (CEST): open, outside lunch
AFTERNOON = datetime(2026, 10, 20, 13, 0)
# Same day, 12:00 in Stockholm: inside the lunch window
LUNCHTIME = datetime(2026, 10, 20, 10, 0)


class FakeClock:
    """Settable clock returning naive UTC"""

    def __init__(self, now: datetime = AFTERNOON):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FakePaymentProcessor(StripePaymentProcessor):
    """Real Stripe signature checks, no network for checkout sessions"""

    def __init__(self):
        super().__init__(api_key="sk_test", webhook_secret=WEBHOOK_SECRET, currency="sek")
        self.sessions = []
        self.fail_with = None

    async def create_checkout_session(self, line_items, metadata, success_url, cancel_url):
        if self.fail_with:
            raise self.fail_with
        session = CheckoutSession(
            id=f"cs_test_{len(self.sessions) + 1}",
            url=f"https://checkout.stripe.test/pay/{len(self.sessions) + 1}",
        )
        self.sessions.append(
            {
                "session": session,
                "line_items": line_items,
                "metadata": metadata,
                "success_url": success_url,
                "cancel_url": cancel_url,
            }
        )
        return session


class FakeGateway(BaseNotificationGateway):
    """Records texts instead of sending them"""

    def __init__(self):
        self.sent = []
        self.fail = False

    async def send(self, to, message):
        if self.fail:
            raise NotificationError("Gateway down")
        self.sent.append((to, message))
        return f"SM{len(self.sent)}"


def sign_payload(payload: str, secret: str = WEBHOOK_SECRET, timestamp: int = None) -> str:
    """Build a Stripe-Signature header the way Stripe does"""
    timestamp = timestamp or int(time.time())
    signed = f"{timestamp}.{payload}".encode("utf-8")
    signature = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


def completed_event(order_id, session_id="cs_test_1", payment_status="paid", event_id="evt_1") -> str:
    return json.dumps(
        {
            "id": event_id,
            "type": "checkout.session.completed",
            "data": {
                "object": {
                    "id": session_id,
                    "payment_status": payment_status,
                    "payment_intent": "pi_test_1",
                    "metadata": {"order_id": str(order_id)} if order_id else {},
                }
            },
        }
    )


@pytest.fixture
async def test_db():
    """Create test database"""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def payments():
    return FakePaymentProcessor()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def cart_engine(test_db):
    return CartEngine(AvailabilityRegistry(test_db), lunch=LunchRules())


@pytest.fixture
def make_order(test_db):
    """Insert an order directly; ``paid=True`` makes it visible to staff"""
    async def _make(
        paid: bool = True,
        phone: str = "+46701234567",
        status: str = None,
        paid_at: datetime = None,
        created_at: datetime = None,
        **fields,
    ) -> Order:
        order = Order(
            customer_name=fields.pop("customer_name", "Anna"),
            customer_phone=phone,
            items=fields.pop("items", [{"name": "Margherita", "qty": 1, "price": 130, "comment": ""}]),
            total=fields.pop("total", 130),
            status=status or (OrderStatus.NEW if paid else OrderStatus.PENDING),
            paid_at=paid_at or (datetime.utcnow() if paid else None),
            **fields,
        )
        if created_at:
            order.created_at = created_at
        test_db.add(order)
        await test_db.commit()
        await test_db.refresh(order)
        return order

    return _make


@pytest.fixture
async def client(test_db, clock, payments, gateway):
    """Create test client with overridden database and collaborators"""
    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[deps.get_clock] = lambda: clock
    app.dependency_overrides[deps.get_payment_processor] = lambda: payments
    app.dependency_overrides[deps.get_gateway] = lambda: gateway

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def admin_client(client):
    """Client carrying the kitchen PIN"""
    client.headers["X-Admin-Pin"] = ADMIN_PIN
    return client


@pytest.fixture
def webhook_event():
    """Builder for ``checkout.session.completed`` bodies"""
    return completed_event


@pytest.fixture
def post_webhook(client):
    """POST a body to the Stripe webhook, signed unless a signature is given"""
    async def _post(payload: str, signature: str = None):
        headers = {"Content-Type": "application/json"}
        headers["Stripe-Signature"] = signature if signature is not None else sign_payload(payload)
        return await client.post("/webhooks/stripe", content=payload, headers=headers)

    return _post


@pytest.fixture
def twilio_network_down(monkeypatch):
    """Make every Twilio HTTP request fail below the SDK's own error handling"""
    def request(self, *args, **kwargs):
        raise requests.exceptions.ConnectionError("network down")

    monkeypatch.setattr(TwilioHttpClient, "request", request)
