"""Menu availability model"""

from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime

from storefront.database import Base


class MenuAvailability(Base):
    """Per-item stock flag; a missing row means the item is available"""
    __tablename__ = "menu_availability"

    item_id = Column(String(100), primary_key=True)
    available = Column(Boolean, nullable=False, default=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
