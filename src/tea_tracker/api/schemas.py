"""Pydantic request models for the HTTP API."""

from pydantic import BaseModel, Field

from tea_tracker.domain.models import ItemType


class EntryLineModel(BaseModel):
    """Selected item with an optional price override."""

    item_id: str
    price: int | None = Field(default=None, ge=0)


class EntryRequest(BaseModel):
    """Daily entry: one optional drink and any number of snacks."""

    employee_id: str
    drink: EntryLineModel | None = None
    snacks: list[EntryLineModel] = Field(default_factory=list)


class AdjustmentRequest(BaseModel):
    """Change to today's adjustment for one employee."""

    delta: int
    start: str | None = None
    end: str | None = None


class EmployeeCreate(BaseModel):
    """New employee payload."""

    name: str


class ItemCreate(BaseModel):
    """New catalog item payload."""

    name: str
    price: int = Field(ge=0)
    item_type: ItemType


class PriceUpdate(BaseModel):
    """New default price for an item."""

    price: int = Field(ge=0)


class SessionKey(BaseModel):
    """Identifies one logged session by employee and timestamp text."""

    employee_id: str
    logged_at: str
