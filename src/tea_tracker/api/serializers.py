"""JSON serialization of domain objects for API responses."""

from tea_tracker.domain.billing import (
    BillingReport,
    ConsumptionSession,
    DailyCompanyBill,
    EmployeeBill,
)
from tea_tracker.domain.models import Consumption, Employee, Item


def serialize_employee(employee: Employee) -> dict[str, object]:
    return {"id": employee.id, "name": employee.name, "is_active": employee.is_active}


def serialize_item(item: Item) -> dict[str, object]:
    return {
        "id": item.id,
        "name": item.name,
        "price": item.price,
        "item_type": item.item_type.value,
        "is_active": item.is_active,
    }


def serialize_consumption(record: Consumption) -> dict[str, object]:
    return {
        "id": record.id,
        "employee_id": record.employee_id,
        "item_id": record.item_id,
        "item_name": record.item_name,
        "item_type": record.item_type.value,
        "price": record.price,
        "logged_at": record.logged_at.isoformat(),
    }


def serialize_session(session: ConsumptionSession) -> dict[str, object]:
    return {
        "employee_id": session.employee_id,
        "logged_at": session.logged_at.isoformat(),
        "total_amount": session.total_amount,
        "items": [serialize_consumption(item) for item in session.items],
    }


def serialize_report(report: BillingReport) -> dict[str, object]:
    """Serialize a billing report, including the footer totals."""
    return {
        "start": report.start.isoformat() if report.start else None,
        "end": report.end.isoformat() if report.end else None,
        "today": report.today.isoformat(),
        "company_bill_rows": [_serialize_row(row) for row in report.company_bill_rows],
        "employee_bills": [_serialize_bill(bill) for bill in report.employee_bills],
        "daily_logs": {
            day.isoformat(): [serialize_consumption(record) for record in records]
            for day, records in report.daily_logs.items()
        },
        "total_drink_amount": report.total_drink_amount,
        "total_manual_transfer_amount": report.total_manual_transfer_amount,
        "grand_total_company_amount": report.grand_total_company_amount,
        "total_original_snack_amount": report.total_original_snack_amount,
        "total_payable_amount": report.total_payable_amount,
    }


def _serialize_row(row: DailyCompanyBill) -> dict[str, object]:
    return {
        "date": row.day.isoformat(),
        "total_staff": row.total_staff,
        "actual_drink_count": row.actual_drink_count,
        "amount": row.amount,
    }


def _serialize_bill(bill: EmployeeBill) -> dict[str, object]:
    return {
        "employee": serialize_employee(bill.employee),
        "items": [serialize_consumption(item) for item in bill.items],
        "original_item_count": bill.original_item_count,
        "original_amount": bill.original_amount,
        "total_deducted_count": bill.total_deducted_count,
        "historical_deducted_count": bill.historical_deducted_count,
        "today_adjustment_count": bill.today_adjustment_count,
        "final_deducted_count": bill.final_deducted_count,
        "final_deducted_amount": bill.final_deducted_amount,
        "final_payable_amount": bill.final_payable_amount,
        "can_increase_adjustment": bill.can_increase_adjustment,
        "can_decrease_adjustment": bill.can_decrease_adjustment,
    }
