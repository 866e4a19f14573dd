"""Domain models for the tea tracker."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum


class ItemType(StrEnum):
    """Billing category of a menu item."""

    DRINK = "drink"
    SNACK = "snack"


@dataclass(frozen=True)
class Employee:
    """Represents an employee on the office roster."""

    id: str
    name: str
    is_active: bool = True


@dataclass(frozen=True)
class Item:
    """Menu item with its current default unit price."""

    id: str
    name: str
    price: int
    item_type: ItemType
    is_active: bool = True


@dataclass(frozen=True)
class Consumption:
    """A single logged purchase.

    Name, type and price are snapshots taken when the record was created, so
    later catalog edits never change what was billed.
    """

    id: str
    employee_id: str
    item_id: str
    item_name: str
    item_type: ItemType
    price: int
    logged_at: datetime

    @property
    def day(self) -> date:
        """Calendar day the record belongs to."""
        return self.logged_at.date()


DailyAdjustments = dict[str, dict[str, int]]
