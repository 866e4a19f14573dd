"""Derived billing models."""

from dataclasses import dataclass, field
from datetime import date, datetime

from tea_tracker.domain.models import Consumption, DailyAdjustments, Employee


@dataclass(frozen=True)
class DailyCompanyBill:
    """Company drink totals for one day."""

    day: date
    total_staff: int
    actual_drink_count: int
    amount: int


@dataclass(frozen=True)
class EmployeeBill:
    """Snack bill for one employee with adjustment accounting."""

    employee: Employee
    items: list[Consumption]
    original_item_count: int
    original_amount: int
    total_deducted_count: int
    today_adjustment_count: int
    final_deducted_count: int
    final_deducted_amount: int
    final_payable_amount: int
    can_increase_adjustment: bool
    can_decrease_adjustment: bool

    @property
    def historical_deducted_count(self) -> int:
        """Deductions recorded on days other than today."""
        return max(self.total_deducted_count - self.today_adjustment_count, 0)


@dataclass(frozen=True)
class BillingReport:
    """Reconciled company and employee bills for a date range."""

    start: date | None
    end: date | None
    today: date
    company_bill_rows: list[DailyCompanyBill] = field(default_factory=list)
    employee_bills: list[EmployeeBill] = field(default_factory=list)
    daily_logs: dict[date, list[Consumption]] = field(default_factory=dict)
    total_drink_amount: int = 0
    total_manual_transfer_amount: int = 0
    grand_total_company_amount: int = 0
    total_original_snack_amount: int = 0
    total_payable_amount: int = 0

    def bill_for(self, employee_id: str) -> EmployeeBill | None:
        """Return the snack bill for an employee, if they have one."""
        for bill in self.employee_bills:
            if bill.employee.id == employee_id:
                return bill
        return None


@dataclass(frozen=True)
class AdjustmentResult:
    """Outcome of a request to change today's adjustment."""

    adjustments: DailyAdjustments
    applied: bool
    reason: str | None = None


@dataclass(frozen=True)
class ConsumptionSession:
    """Records logged together by one employee in one entry."""

    employee_id: str
    logged_at: datetime
    items: list[Consumption]

    @property
    def total_amount(self) -> int:
        """Sum of the price snapshots in the session."""
        return sum(item.price for item in self.items)
