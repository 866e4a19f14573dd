"""Supabase-backed employee repository."""

from dataclasses import dataclass

from supabase import Client

from tea_tracker.domain.models import Employee
from tea_tracker.services.roster import EmployeeRepository

_COLUMNS = "id, name, is_active"


@dataclass
class SupabaseEmployeeRepository(EmployeeRepository):
    """Supabase implementation for the employee roster."""

    client: Client

    def list_employees(self) -> list[Employee]:
        """Return all employees in the order they were added."""
        response = (
            self.client.table("employees")
            .select(_COLUMNS)
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def get_employee(self, employee_id: str) -> Employee | None:
        """Return an employee by id, if present."""
        response = (
            self.client.table("employees")
            .select(_COLUMNS)
            .eq("id", employee_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_employee(self, name: str) -> Employee:
        """Insert an active employee and return it."""
        response = (
            self.client.table("employees")
            .insert({"name": name, "is_active": True})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create employee")
        return _parse_row(response.data[0])

    def update_employee(self, employee: Employee) -> Employee:
        """Update an employee row."""
        self.client.table("employees").update(
            {"name": employee.name, "is_active": employee.is_active}
        ).eq("id", employee.id).execute()
        return employee


def _parse_row(row: dict[str, object]) -> Employee:
    return Employee(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        is_active=bool(row.get("is_active", True)),
    )
