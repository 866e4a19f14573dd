"""Supabase storage for the daily adjustment map."""

from dataclasses import dataclass

from supabase import Client

from tea_tracker.domain.models import DailyAdjustments
from tea_tracker.services.reports import AdjustmentRepository

_STATE_KEY = "daily_adjustments"


@dataclass
class SupabaseAdjustmentRepository(AdjustmentRepository):
    """Keeps the whole adjustment map as one JSON value in ``app_state``."""

    client: Client

    def get_daily_adjustments(self) -> DailyAdjustments:
        """Return the stored map, or an empty one."""
        response = (
            self.client.table("app_state")
            .select("value")
            .eq("key", _STATE_KEY)
            .limit(1)
            .execute()
        )
        if not response.data:
            return {}
        value = response.data[0].get("value") or {}
        return {
            str(day): {str(emp): int(count) for emp, count in counts.items()}
            for day, counts in value.items()
        }

    def set_daily_adjustments(self, adjustments: DailyAdjustments) -> None:
        """Replace the stored map."""
        self.client.table("app_state").upsert(
            {"key": _STATE_KEY, "value": adjustments}
        ).execute()
