"""Tests for container wiring and configuration."""

from datetime import timedelta

from tea_tracker.config import Settings, parse_timezone
from tea_tracker.containers import build_container, office_clock


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.settings is settings
    assert container.entry_service.employee_repository is (
        container.roster_service.employee_repository
    )
    assert container.report_service.consumption_repository is (
        container.entry_service.consumption_repository
    )


def test_parse_timezone_falls_back_to_office_default() -> None:
    assert parse_timezone("Europe/Berlin").key == "Europe/Berlin"
    assert parse_timezone("Not/AZone").key == "Asia/Kolkata"
    assert parse_timezone("  ").key == "Asia/Kolkata"
    assert parse_timezone(None).key == "Asia/Kolkata"


def test_office_clock_is_timezone_aware() -> None:
    now = office_clock("Asia/Kolkata")()

    assert now.utcoffset() == timedelta(hours=5, minutes=30)
