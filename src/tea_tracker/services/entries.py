"""Daily entry logging and the activity feed."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import uuid4

from tea_tracker.domain.billing import ConsumptionSession
from tea_tracker.domain.models import Consumption, Employee, Item, ItemType
from tea_tracker.services.roster import EmployeeRepository, ItemRepository

_logger = logging.getLogger(__name__)


class EntryError(ValueError):
    """Raised when a daily entry cannot be recorded."""


class ConsumptionRepository(Protocol):
    """Persistence interface for consumption records."""

    def list_consumptions(self) -> list[Consumption]:
        """Return every consumption record."""

    def add_consumptions(self, records: list[Consumption]) -> None:
        """Persist a batch of records in a single write."""

    def remove_consumptions(self, consumption_ids: list[str]) -> None:
        """Delete the given records in a single write."""


@dataclass(frozen=True)
class EntryLine:
    """One item selected in a daily entry; ``price`` overrides the default."""

    item_id: str
    price: int | None = None


@dataclass
class EntryService:
    """Service that records daily entries and manages logged sessions."""

    employee_repository: EmployeeRepository
    item_repository: ItemRepository
    consumption_repository: ConsumptionRepository
    clock: Callable[[], datetime]

    def record_entry(
        self,
        employee_id: str,
        drink: EntryLine | None = None,
        snacks: list[EntryLine] | None = None,
    ) -> list[Consumption]:
        """Record a drink and any snacks as one session with a shared timestamp."""
        employee = self.employee_repository.get_employee(employee_id)
        if employee is None or not employee.is_active:
            raise EntryError("Please select an active employee.")

        lines: list[tuple[EntryLine, ItemType]] = []
        if drink is not None:
            lines.append((drink, ItemType.DRINK))
        lines.extend((line, ItemType.SNACK) for line in snacks or [])
        if not lines:
            raise EntryError("Please select at least one item (drink or snack).")

        logged_at = self.clock()
        records = [
            _snapshot(employee, self._resolve_item(line, expected), line, logged_at)
            for line, expected in lines
        ]
        self.consumption_repository.add_consumptions(records)
        _logger.info(
            "Entry recorded: employee_id=%s items=%s logged_at=%s",
            employee.id,
            len(records),
            logged_at.isoformat(),
        )
        return records

    def todays_sessions(self) -> list[ConsumptionSession]:
        """Return today's sessions for the activity feed, newest first."""
        today = self.clock().date()
        records = [
            record
            for record in self.consumption_repository.list_consumptions()
            if record.day == today
        ]
        return group_sessions(records)

    def remove_session(self, employee_id: str, logged_at: datetime | str) -> int:
        """Delete every record of a session and return how many were removed.

        A session is keyed by its exact timestamp text, so the same instant
        written with another UTC offset is a different session.
        """
        session_key = _session_timestamp(logged_at)
        ids = [
            record.id
            for record in self.consumption_repository.list_consumptions()
            if record.employee_id == employee_id
            and record.logged_at.isoformat() == session_key
        ]
        if not ids:
            return 0
        self.consumption_repository.remove_consumptions(ids)
        _logger.info(
            "Session removed: employee_id=%s logged_at=%s items=%s",
            employee_id,
            session_key,
            len(ids),
        )
        return len(ids)

    def _resolve_item(self, line: EntryLine, expected: ItemType) -> Item:
        item = self.item_repository.get_item(line.item_id)
        if item is None or not item.is_active:
            raise EntryError(f"Unknown item: {line.item_id}")
        if item.item_type != expected:
            raise EntryError(f"{item.name} is not a {expected.value}.")
        if line.price is not None and line.price < 0:
            raise EntryError("Price cannot be negative.")
        return item


def group_sessions(records: Iterable[Consumption]) -> list[ConsumptionSession]:
    """Group records sharing a timestamp and employee, newest first."""
    grouped: dict[tuple[str, str], list[Consumption]] = {}
    for record in records:
        key = (record.logged_at.isoformat(), record.employee_id)
        grouped.setdefault(key, []).append(record)
    return [
        ConsumptionSession(
            employee_id=employee_id,
            logged_at=grouped[(timestamp, employee_id)][0].logged_at,
            items=grouped[(timestamp, employee_id)],
        )
        for timestamp, employee_id in sorted(grouped, reverse=True)
    ]


def _session_timestamp(logged_at: datetime | str) -> str:
    if isinstance(logged_at, datetime):
        return logged_at.isoformat()
    return logged_at.strip()


def _snapshot(
    employee: Employee, item: Item, line: EntryLine, logged_at: datetime
) -> Consumption:
    return Consumption(
        id=str(uuid4()),
        employee_id=employee.id,
        item_id=item.id,
        item_name=item.name,
        item_type=item.item_type,
        price=item.price if line.price is None else line.price,
        logged_at=logged_at,
    )
