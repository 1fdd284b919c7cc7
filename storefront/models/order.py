"""Order model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON, Integer
from sqlalchemy.dialects.postgresql import UUID

from storefront.database import Base


class OrderStatus:
    """Stored status labels"""
    PENDING = "Pending"
    NEW = "New"
    COOKING = "Cooking"
    DONE = "Done"


class Order(Base):
    """Takeaway orders"""
    __tablename__ = "orders"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Customer information
    customer_name = Column(String(255), nullable=False)
    customer_phone = Column(String(20), nullable=False)  # E.164: +46701234567

    # Frozen snapshot of the cart at checkout
    # [{"name": "Kebabpizza", "qty": 1, "price": 130, "comment": "extra sås"}, ...]
    items = Column(JSON, nullable=False)
    total = Column(Integer, nullable=False, default=0)

    # Status: Pending, New, "Cooking • 15 min", Done
    status = Column(String(50), nullable=False, default=OrderStatus.PENDING)
    eta_minutes = Column(Integer)

    # Payment
    paid_at = Column(DateTime)
    payment_session_id = Column(String(255), index=True)
    payment_intent_id = Column(String(255))

    # SMS idempotency markers
    sms_cooking_sent_at = Column(DateTime)
    sms_ready_sent_at = Column(DateTime)

    archived_at = Column(DateTime)

    # Metadata
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def is_paid(self) -> bool:
        return self.paid_at is not None

    @property
    def is_done(self) -> bool:
        return (self.status or "").startswith(OrderStatus.DONE)
