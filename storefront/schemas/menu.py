"""Menu schemas"""

from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field


class MenuItemResponse(BaseModel):
    """Catalog entry with its current stock flag"""
    id: str
    category: str
    name: str
    price: int
    description: Optional[str] = None
    number: Optional[int] = None
    tags: List[str] = []
    available: bool = True


class MenuResponse(BaseModel):
    items: List[MenuItemResponse]
    lunch_active: bool
    poll_seconds: int


class AvailabilityUpdate(BaseModel):
    """Staff stock toggle"""
    model_config = ConfigDict(populate_by_name=True)

    item_id: str = Field(alias="itemId")
    available: bool


class AvailabilityUpdateResponse(BaseModel):
    ok: bool = True
    item_id: str
    available: bool


class OpeningHoursResponse(BaseModel):
    open: bool
    message: str
