"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from tea_tracker.config import Settings
from tea_tracker.containers import AppContainer
from tea_tracker.domain.models import (
    Consumption,
    DailyAdjustments,
    Employee,
    Item,
    ItemType,
)
from tea_tracker.services.entries import ConsumptionRepository, EntryService
from tea_tracker.services.reports import AdjustmentRepository, ReportService
from tea_tracker.services.roster import (
    EmployeeRepository,
    ItemRepository,
    RosterService,
)

IST = timezone(timedelta(hours=5, minutes=30))
NOW = datetime(2024, 1, 1, 9, 30, tzinfo=IST)


def make_consumption(  # noqa: PLR0913
    employee_id: str,
    item_name: str,
    item_type: ItemType,
    price: int,
    logged_at: datetime = NOW,
    item_id: str | None = None,
) -> Consumption:
    """Build a consumption record with a fresh id."""
    return Consumption(
        id=str(uuid4()),
        employee_id=employee_id,
        item_id=item_id or item_name.lower(),
        item_name=item_name,
        item_type=item_type,
        price=price,
        logged_at=logged_at,
    )


@dataclass
class InMemoryEmployeeRepository(EmployeeRepository):
    """In-memory employee repository for tests."""

    employees: list[Employee] = field(default_factory=list)

    def list_employees(self) -> list[Employee]:
        return list(self.employees)

    def get_employee(self, employee_id: str) -> Employee | None:
        for employee in self.employees:
            if employee.id == employee_id:
                return employee
        return None

    def create_employee(self, name: str) -> Employee:
        employee = Employee(id=str(uuid4()), name=name, is_active=True)
        self.employees.append(employee)
        return employee

    def update_employee(self, employee: Employee) -> Employee:
        self.employees = [
            employee if current.id == employee.id else current
            for current in self.employees
        ]
        return employee


@dataclass
class InMemoryItemRepository(ItemRepository):
    """In-memory catalog for tests."""

    items: list[Item] = field(default_factory=list)

    def list_items(self) -> list[Item]:
        return list(self.items)

    def get_item(self, item_id: str) -> Item | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def create_item(self, name: str, price: int, item_type: ItemType) -> Item:
        item = Item(id=str(uuid4()), name=name, price=price, item_type=item_type)
        self.items.append(item)
        return item

    def update_item(self, item: Item) -> Item:
        self.items = [
            item if current.id == item.id else current for current in self.items
        ]
        return item


@dataclass
class InMemoryConsumptionRepository(ConsumptionRepository):
    """In-memory consumption log that counts writes."""

    records: list[Consumption] = field(default_factory=list)
    writes: int = 0

    def list_consumptions(self) -> list[Consumption]:
        return list(self.records)

    def add_consumptions(self, records: list[Consumption]) -> None:
        self.records.extend(records)
        self.writes += 1

    def remove_consumptions(self, consumption_ids: list[str]) -> None:
        removed = set(consumption_ids)
        self.records = [record for record in self.records if record.id not in removed]
        self.writes += 1


@dataclass
class InMemoryAdjustmentRepository(AdjustmentRepository):
    """In-memory adjustment map store."""

    adjustments: DailyAdjustments = field(default_factory=dict)
    saves: int = 0

    def get_daily_adjustments(self) -> DailyAdjustments:
        return {day: dict(counts) for day, counts in self.adjustments.items()}

    def set_daily_adjustments(self, adjustments: DailyAdjustments) -> None:
        self.adjustments = {day: dict(counts) for day, counts in adjustments.items()}
        self.saves += 1


@dataclass
class FixedClock:
    """Clock that returns a settable moment."""

    now: datetime = NOW

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        admin_token="admin-token",
        timezone="Asia/Kolkata",
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def employee_repository() -> InMemoryEmployeeRepository:
    return InMemoryEmployeeRepository(
        employees=[
            Employee(id="1", name="Gopalan"),
            Employee(id="2", name="Navin"),
            Employee(id="3", name="Jeeva", is_active=False),
        ]
    )


@pytest.fixture
def item_repository() -> InMemoryItemRepository:
    return InMemoryItemRepository(
        items=[
            Item(id="i1", name="Tea", price=10, item_type=ItemType.DRINK),
            Item(id="i2", name="Coffee", price=15, item_type=ItemType.DRINK),
            Item(id="i4", name="Bonda", price=10, item_type=ItemType.SNACK),
            Item(id="i5", name="Bajji", price=10, item_type=ItemType.SNACK),
            Item(
                id="i9",
                name="Samosa",
                price=12,
                item_type=ItemType.SNACK,
                is_active=False,
            ),
        ]
    )


@pytest.fixture
def consumption_repository() -> InMemoryConsumptionRepository:
    return InMemoryConsumptionRepository()


@pytest.fixture
def adjustment_repository() -> InMemoryAdjustmentRepository:
    return InMemoryAdjustmentRepository()


@pytest.fixture
def roster_service(
    employee_repository: InMemoryEmployeeRepository,
    item_repository: InMemoryItemRepository,
) -> RosterService:
    return RosterService(
        employee_repository=employee_repository, item_repository=item_repository
    )


@pytest.fixture
def entry_service(
    employee_repository: InMemoryEmployeeRepository,
    item_repository: InMemoryItemRepository,
    consumption_repository: InMemoryConsumptionRepository,
    clock: Callable[[], datetime],
) -> EntryService:
    return EntryService(
        employee_repository=employee_repository,
        item_repository=item_repository,
        consumption_repository=consumption_repository,
        clock=clock,
    )


@pytest.fixture
def report_service(
    employee_repository: InMemoryEmployeeRepository,
    consumption_repository: InMemoryConsumptionRepository,
    adjustment_repository: InMemoryAdjustmentRepository,
    clock: Callable[[], datetime],
) -> ReportService:
    return ReportService(
        employee_repository=employee_repository,
        consumption_repository=consumption_repository,
        adjustment_repository=adjustment_repository,
        clock=clock,
    )


@pytest.fixture
def container(
    settings: Settings,
    roster_service: RosterService,
    entry_service: EntryService,
    report_service: ReportService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        roster_service=roster_service,
        entry_service=entry_service,
        report_service=report_service,
    )
