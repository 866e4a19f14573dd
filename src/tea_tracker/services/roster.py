"""Roster and menu catalog management."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Protocol

from tea_tracker.domain.models import Employee, Item, ItemType

_logger = logging.getLogger(__name__)

DEFAULT_EMPLOYEES = (
    "Gopalan",
    "Navin",
    "Jeeva",
    "Sakthivel",
    "Sandhiya",
    "Sanjiv",
    "Kowsalya",
    "Praneesh",
    "Richard",
    "Abhishek",
)

DEFAULT_ITEMS = (
    ("Tea", 10, ItemType.DRINK),
    ("Coffee", 15, ItemType.DRINK),
    ("Milk", 10, ItemType.DRINK),
    ("Bonda", 10, ItemType.SNACK),
    ("Bajji", 10, ItemType.SNACK),
    ("Vada", 10, ItemType.SNACK),
)


class RosterError(ValueError):
    """Raised when a roster or catalog change is invalid."""


class EmployeeRepository(Protocol):
    """Persistence interface for employees."""

    def list_employees(self) -> list[Employee]:
        """Return every employee, active or not, in roster order."""

    def get_employee(self, employee_id: str) -> Employee | None:
        """Return an employee by id, if present."""

    def create_employee(self, name: str) -> Employee:
        """Create an active employee and return it."""

    def update_employee(self, employee: Employee) -> Employee:
        """Persist changes to an employee and return it."""


class ItemRepository(Protocol):
    """Persistence interface for the menu catalog."""

    def list_items(self) -> list[Item]:
        """Return every catalog item."""

    def get_item(self, item_id: str) -> Item | None:
        """Return an item by id, if present."""

    def create_item(self, name: str, price: int, item_type: ItemType) -> Item:
        """Create an active item and return it."""

    def update_item(self, item: Item) -> Item:
        """Persist changes to an item and return it."""


@dataclass
class RosterService:
    """Application service for administrator actions on employees and items."""

    employee_repository: EmployeeRepository
    item_repository: ItemRepository

    def list_employees(self) -> list[Employee]:
        """Return the full roster."""
        return self.employee_repository.list_employees()

    def active_employee_count(self) -> int:
        """Return the number of active employees right now."""
        return count_active(self.list_employees())

    def add_employee(self, name: str) -> Employee:
        """Add a new active employee."""
        cleaned = name.strip()
        if not cleaned:
            raise RosterError("Employee name is required.")
        employee = self.employee_repository.create_employee(cleaned)
        _logger.info("Employee added: id=%s name=%s", employee.id, employee.name)
        return employee

    def toggle_employee(self, employee_id: str) -> Employee | None:
        """Flip an employee between active and inactive."""
        employee = self.employee_repository.get_employee(employee_id)
        if employee is None:
            return None
        updated = self.employee_repository.update_employee(
            replace(employee, is_active=not employee.is_active)
        )
        _logger.info(
            "Employee status changed: id=%s active=%s", updated.id, updated.is_active
        )
        return updated

    def list_items(self) -> list[Item]:
        """Return the full menu catalog."""
        return self.item_repository.list_items()

    def add_item(self, name: str, price: int, item_type: ItemType) -> Item:
        """Add a new active item to the catalog."""
        cleaned = name.strip()
        if not cleaned:
            raise RosterError("Item name is required.")
        _check_price(price)
        item = self.item_repository.create_item(cleaned, price, ItemType(item_type))
        _logger.info("Item added: id=%s name=%s price=%s", item.id, item.name, price)
        return item

    def update_item_price(self, item_id: str, price: int) -> Item | None:
        """Change an item's default price; past consumption keeps its snapshot."""
        _check_price(price)
        item = self.item_repository.get_item(item_id)
        if item is None:
            return None
        return self.item_repository.update_item(replace(item, price=price))

    def seed_defaults(self) -> dict[str, int]:
        """Populate an empty roster or catalog with the office defaults."""
        created = {"employees": 0, "items": 0}
        if not self.employee_repository.list_employees():
            for name in DEFAULT_EMPLOYEES:
                self.employee_repository.create_employee(name)
            created["employees"] = len(DEFAULT_EMPLOYEES)
        if not self.item_repository.list_items():
            for name, price, item_type in DEFAULT_ITEMS:
                self.item_repository.create_item(name, price, item_type)
            created["items"] = len(DEFAULT_ITEMS)
        _logger.info("Seeded defaults: %s", created)
        return created


def count_active(employees: Iterable[Employee]) -> int:
    """Return how many of ``employees`` are active."""
    return sum(1 for employee in employees if employee.is_active)

def _check_price(price: int) -> None:
    if not isinstance(price, int) or isinstance(price, bool):
        raise RosterError("Price must be a whole number.")
    if price < 0:
        raise RosterError("Price cannot be negative.")
