"""Supabase-backed menu catalog."""

from dataclasses import dataclass

from supabase import Client

from tea_tracker.domain.models import Item, ItemType
from tea_tracker.services.roster import ItemRepository

_COLUMNS = "id, name, price, item_type, is_active"


@dataclass
class SupabaseItemRepository(ItemRepository):
    """Supabase implementation for menu items."""

    client: Client

    def list_items(self) -> list[Item]:
        """Return all items in the order they were added."""
        response = (
            self.client.table("items")
            .select(_COLUMNS)
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def get_item(self, item_id: str) -> Item | None:
        """Return an item by id, if present."""
        response = (
            self.client.table("items")
            .select(_COLUMNS)
            .eq("id", item_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_item(self, name: str, price: int, item_type: ItemType) -> Item:
        """Insert an active item and return it."""
        response = (
            self.client.table("items")
            .insert(
                {
                    "name": name,
                    "price": price,
                    "item_type": item_type.value,
                    "is_active": True,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create item")
        return _parse_row(response.data[0])

    def update_item(self, item: Item) -> Item:
        """Update an item row."""
        self.client.table("items").update(
            {
                "name": item.name,
                "price": item.price,
                "item_type": item.item_type.value,
                "is_active": item.is_active,
            }
        ).eq("id", item.id).execute()
        return item


def _parse_row(row: dict[str, object]) -> Item:
    return Item(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        price=int(row["price"]),
        item_type=ItemType(row["item_type"]),
        is_active=bool(row.get("is_active", True)),
    )
