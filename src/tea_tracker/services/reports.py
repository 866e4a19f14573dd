"""Weekly report and today's adjustment controls."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Protocol

from tea_tracker.domain.billing import AdjustmentResult, BillingReport
from tea_tracker.domain.models import DailyAdjustments
from tea_tracker.services.billing import adjust_employee_today, compute_billing
from tea_tracker.services.entries import ConsumptionRepository
from tea_tracker.services.roster import EmployeeRepository, count_active

_logger = logging.getLogger(__name__)


class AdjustmentRepository(Protocol):
    """Persistence interface for the daily adjustment map."""

    def get_daily_adjustments(self) -> DailyAdjustments:
        """Return the full adjustment map."""

    def set_daily_adjustments(self, adjustments: DailyAdjustments) -> None:
        """Replace the full adjustment map."""


@dataclass
class ReportService:
    """Loads record snapshots and runs the billing engine over them."""

    employee_repository: EmployeeRepository
    consumption_repository: ConsumptionRepository
    adjustment_repository: AdjustmentRepository
    clock: Callable[[], datetime]

    def today(self) -> date:
        """Return today's date in the office timezone."""
        return self.clock().date()

    def weekly_report(
        self, start: date | str | None = None, end: date | str | None = None
    ) -> BillingReport:
        """Return the billing report, defaulting to the current week."""
        today = self.today()
        if start is None and end is None:
            start, end = current_week(today)
        employees = self.employee_repository.list_employees()
        return compute_billing(
            consumptions=self.consumption_repository.list_consumptions(),
            employees=employees,
            active_employee_count=count_active(employees),
            daily_adjustments=self.adjustment_repository.get_daily_adjustments(),
            start=start,
            end=end,
            today=today,
        )

    def adjust_today(
        self,
        employee_id: str,
        delta: int,
        start: date | str | None = None,
        end: date | str | None = None,
    ) -> AdjustmentResult:
        """Move snack units for an employee to or from today's company bill."""
        report = self.weekly_report(start, end)
        result = adjust_employee_today(
            employee_id=employee_id,
            delta=delta,
            adjustments=self.adjustment_repository.get_daily_adjustments(),
            today=report.today,
            bill=report.bill_for(employee_id),
        )
        if not result.applied:
            _logger.warning(
                "Adjustment rejected: employee_id=%s delta=%s reason=%s",
                employee_id,
                delta,
                result.reason,
            )
            return result
        self.adjustment_repository.set_daily_adjustments(result.adjustments)
        _logger.info(
            "Adjustment applied: employee_id=%s delta=%s day=%s",
            employee_id,
            delta,
            report.today.isoformat(),
        )
        return result


def current_week(today: date) -> tuple[date, date]:
    """Return Monday and Sunday of the week containing ``today``."""
    monday = today - timedelta(days=today.weekday())
    return monday, monday + timedelta(days=6)
