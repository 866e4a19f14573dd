"""Supabase repository for consumption records."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from tea_tracker.domain.models import Consumption, ItemType
from tea_tracker.services.entries import ConsumptionRepository


@dataclass
class SupabaseConsumptionRepository(ConsumptionRepository):
    """Supabase implementation for the consumption log.

    ``logged_at`` is kept as the ISO text the service wrote so that records of
    one session still compare equal after a round trip.
    """

    client: Client

    def list_consumptions(self) -> list[Consumption]:
        """Return every consumption record, oldest first."""
        response = (
            self.client.table("consumptions")
            .select(
                "id, employee_id, item_id, item_name, item_type, price, logged_at"
            )
            .order("logged_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def add_consumptions(self, records: list[Consumption]) -> None:
        """Insert all records of a session in one request."""
        payload = [
            {
                "id": record.id,
                "employee_id": record.employee_id,
                "item_id": record.item_id,
                "item_name": record.item_name,
                "item_type": record.item_type.value,
                "price": record.price,
                "logged_at": record.logged_at.isoformat(),
            }
            for record in records
        ]
        if payload:
            self.client.table("consumptions").insert(payload).execute()

    def remove_consumptions(self, consumption_ids: list[str]) -> None:
        """Delete the given records in one request."""
        if consumption_ids:
            self.client.table("consumptions").delete().in_(
                "id", consumption_ids
            ).execute()


def _parse_row(row: dict[str, object]) -> Consumption:
    price = row["price"]
    if isinstance(price, bool) or not isinstance(price, int | str):
        raise ValueError(f"Invalid price {price!r} for consumption {row.get('id')}")
    return Consumption(
        id=str(row["id"]),
        employee_id=str(row["employee_id"]),
        item_id=str(row.get("item_id") or ""),
        item_name=str(row.get("item_name", "")),
        item_type=ItemType(row["item_type"]),
        price=int(price),
        logged_at=datetime.fromisoformat(str(row["logged_at"])),
    )
