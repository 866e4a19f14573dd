"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from supabase import create_client

from tea_tracker.adapters.supabase_adjustment_repository import (
    SupabaseAdjustmentRepository,
)
from tea_tracker.adapters.supabase_consumption_repository import (
    SupabaseConsumptionRepository,
)
from tea_tracker.adapters.supabase_employee_repository import (
    SupabaseEmployeeRepository,
)
from tea_tracker.adapters.supabase_item_repository import SupabaseItemRepository
from tea_tracker.config import Settings, parse_timezone
from tea_tracker.services.entries import EntryService
from tea_tracker.services.reports import ReportService
from tea_tracker.services.roster import RosterService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    roster_service: RosterService
    entry_service: EntryService
    report_service: ReportService


def office_clock(timezone_name: str) -> Callable[[], datetime]:
    """Return a clock that reads the current time in the office timezone."""
    tz = parse_timezone(timezone_name)

    def now() -> datetime:
        return datetime.now(tz=tz)

    return now


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    employee_repository = SupabaseEmployeeRepository(supabase_client)
    item_repository = SupabaseItemRepository(supabase_client)
    consumption_repository = SupabaseConsumptionRepository(supabase_client)
    adjustment_repository = SupabaseAdjustmentRepository(supabase_client)
    clock = office_clock(resolved_settings.timezone)

    return AppContainer(
        settings=resolved_settings,
        roster_service=RosterService(
            employee_repository=employee_repository,
            item_repository=item_repository,
        ),
        entry_service=EntryService(
            employee_repository=employee_repository,
            item_repository=item_repository,
            consumption_repository=consumption_repository,
            clock=clock,
        ),
        report_service=ReportService(
            employee_repository=employee_repository,
            consumption_repository=consumption_repository,
            adjustment_repository=adjustment_repository,
            clock=clock,
        ),
    )
