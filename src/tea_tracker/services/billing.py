"""Billing engine for company drink bills and employee snack bills.

Everything here is a pure function of its arguments. Callers pass snapshots of
the roster, the consumption log and the adjustment map, plus an explicit
``today``; nothing reads the clock or the record store.
"""

from collections.abc import Iterable, Sequence
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from tea_tracker.domain.billing import (
    AdjustmentResult,
    BillingReport,
    DailyCompanyBill,
    EmployeeBill,
)
from tea_tracker.domain.models import (
    Consumption,
    DailyAdjustments,
    Employee,
    ItemType,
)


class BillingDataError(ValueError):
    """Raised when billing input carries values of the wrong type."""


def compute_billing(  # noqa: PLR0913
    consumptions: Sequence[Consumption],
    employees: Sequence[Employee],
    active_employee_count: int,
    daily_adjustments: DailyAdjustments,
    start: date | str | None,
    end: date | str | None,
    today: date | str,
) -> BillingReport:
    """Compute the reconciled billing report for ``[start, end]``."""
    today_day = _require_day(today)
    start_day = coerce_day(start)
    end_day = coerce_day(end)
    if start_day is None or end_day is None or start_day > end_day:
        return BillingReport(start=start_day, end=end_day, today=today_day)

    for record in consumptions:
        _check_record(record)
    counts_by_day = _parse_adjustments(daily_adjustments)

    in_range = filter_by_range(consumptions, start_day, end_day)
    daily_logs = group_by_day(in_range)
    rows = build_company_rows(daily_logs, active_employee_count)
    bills = build_employee_bills(
        in_range, employees, counts_by_day, start_day, end_day, today_day
    )

    total_drink_amount = sum(row.amount for row in rows)
    total_transfer = sum(bill.final_deducted_amount for bill in bills)
    return BillingReport(
        start=start_day,
        end=end_day,
        today=today_day,
        company_bill_rows=rows,
        employee_bills=bills,
        daily_logs=daily_logs,
        total_drink_amount=total_drink_amount,
        total_manual_transfer_amount=total_transfer,
        grand_total_company_amount=total_drink_amount + total_transfer,
        total_original_snack_amount=sum(bill.original_amount for bill in bills),
        total_payable_amount=sum(bill.final_payable_amount for bill in bills),
    )


def filter_by_range(
    consumptions: Iterable[Consumption], start: date, end: date
) -> list[Consumption]:
    """Return records whose calendar day falls within ``[start, end]``."""
    return [record for record in consumptions if start <= record.day <= end]


def group_by_day(consumptions: Iterable[Consumption]) -> dict[date, list[Consumption]]:
    """Partition records by calendar day, ascending."""
    grouped: dict[date, list[Consumption]] = {}
    for record in consumptions:
        grouped.setdefault(record.day, []).append(record)
    return {day: grouped[day] for day in sorted(grouped)}


def build_company_rows(
    daily_logs: dict[date, list[Consumption]], active_employee_count: int
) -> list[DailyCompanyBill]:
    """Build one company drink row per day that has any activity."""
    rows = []
    for day, records in daily_logs.items():
        drinks = [record for record in records if record.item_type == ItemType.DRINK]
        rows.append(
            DailyCompanyBill(
                day=day,
                total_staff=active_employee_count,
                actual_drink_count=len(drinks),
                amount=sum(record.price for record in drinks),
            )
        )
    return rows


def build_employee_bills(  # noqa: PLR0913
    consumptions: Iterable[Consumption],
    employees: Sequence[Employee],
    counts_by_day: dict[date, dict[str, int]],
    start: date,
    end: date,
    today: date,
) -> list[EmployeeBill]:
    """Build snack bills in roster order for employees with snacks in range."""
    snacks: dict[str, list[Consumption]] = {}
    for record in consumptions:
        if record.item_type == ItemType.SNACK:
            snacks.setdefault(record.employee_id, []).append(record)

    bills = []
    seen: set[str] = set()
    for employee in employees:
        items = snacks.get(employee.id)
        if not items or employee.id in seen:
            continue
        seen.add(employee.id)
        bills.append(
            _build_bill(employee, items, counts_by_day, start, end, today)
        )
    return bills


def deduction_amount(
    original_amount: int, original_count: int, deducted_count: int
) -> int:
    """Return the amount moved to the company bill for ``deducted_count`` units.

    Uses the average unit price times the deducted count, rounded half up once
    at the end, so a full deduction always equals ``original_amount``.
    """
    if original_count <= 0 or deducted_count <= 0:
        return 0
    exact = Decimal(original_amount) * deducted_count / original_count
    return int(exact.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def adjust_employee_today(
    employee_id: str,
    delta: int,
    adjustments: DailyAdjustments,
    today: date | str,
    bill: EmployeeBill | None,
) -> AdjustmentResult:
    """Apply ``delta`` to today's adjustment for an employee.

    ``bill`` is the employee's current snack bill (``None`` when they have no
    snacks in range). Guard violations leave the map unchanged and report why.
    The input map is never mutated.

    Increases are bounded by the deductions inside the bill's range. When
    ``today`` falls outside that range, today's count does not feed
    ``total_deducted_count``, so repeated increases keep passing the guard.
    """
    today_key = _require_day(today).isoformat()
    current = adjustments.get(today_key, {}).get(employee_id, 0)
    reason = _guard_violation(delta, current, bill)
    updated = {day: dict(counts) for day, counts in adjustments.items()}
    if reason is not None:
        return AdjustmentResult(adjustments=updated, applied=False, reason=reason)
    updated.setdefault(today_key, {})[employee_id] = current + delta
    return AdjustmentResult(adjustments=updated, applied=True)


def coerce_day(value: date | str | None) -> date | None:
    """Return a calendar day from a date or ``YYYY-MM-DD`` string, else None."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value)
        except ValueError:
            return None
    return None


def _require_day(value: date | str) -> date:
    day = coerce_day(value)
    if day is None:
        raise BillingDataError(f"Invalid day {value!r}")
    return day


def _build_bill(  # noqa: PLR0913
    employee: Employee,
    items: list[Consumption],
    counts_by_day: dict[date, dict[str, int]],
    start: date,
    end: date,
    today: date,
) -> EmployeeBill:
    original_count = len(items)
    original_amount = sum(item.price for item in items)
    raw_total = sum(
        counts.get(employee.id, 0)
        for day, counts in counts_by_day.items()
        if start <= day <= end
    )
    total_deducted = max(raw_total, 0)
    today_count = counts_by_day.get(today, {}).get(employee.id, 0)
    final_count = min(total_deducted, original_count)
    final_amount = deduction_amount(original_amount, original_count, final_count)
    return EmployeeBill(
        employee=employee,
        items=list(items),
        original_item_count=original_count,
        original_amount=original_amount,
        total_deducted_count=total_deducted,
        today_adjustment_count=today_count,
        final_deducted_count=final_count,
        final_deducted_amount=final_amount,
        final_payable_amount=original_amount - final_amount,
        can_increase_adjustment=total_deducted + 1 <= original_count,
        can_decrease_adjustment=today_count > 0,
    )


def _guard_violation(delta: int, current: int, bill: EmployeeBill | None) -> str | None:
    if delta == 0:
        return "Adjustment delta is zero."
    if delta > 0:
        if bill is None:
            return "No snacks in range to move to the company bill."
        if bill.total_deducted_count + delta > bill.original_item_count:
            return "Cannot move more snacks than were consumed."
        return None
    if current + delta < 0:
        return "Cannot remove more than was added today."
    return None


def _check_record(record: Consumption) -> None:
    if not _is_int(record.price):
        raise BillingDataError(
            f"Consumption {record.id} has non-integer price {record.price!r}"
        )
    if not isinstance(record.logged_at, datetime):
        raise BillingDataError(
            f"Consumption {record.id} has invalid timestamp {record.logged_at!r}"
        )


def _parse_adjustments(adjustments: DailyAdjustments) -> dict[date, dict[str, int]]:
    parsed: dict[date, dict[str, int]] = {}
    for day_key, counts in adjustments.items():
        try:
            day = date.fromisoformat(day_key)
        except (TypeError, ValueError) as exc:
            raise BillingDataError(f"Invalid adjustment day {day_key!r}") from exc
        for employee_id, count in counts.items():
            if not _is_int(count):
                raise BillingDataError(
                    f"Invalid adjustment count {count!r} for {employee_id} "
                    f"on {day_key}"
                )
        parsed[day] = dict(counts)
    return parsed


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
