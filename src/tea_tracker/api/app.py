"""FastAPI application factory."""

import logging

from fastapi import FastAPI, HTTPException, Request, status

from tea_tracker.api.admin import router as admin_router
from tea_tracker.api.schemas import (
    AdjustmentRequest,
    EntryLineModel,
    EntryRequest,
    SessionKey,
)
from tea_tracker.api.serializers import (
    serialize_consumption,
    serialize_report,
    serialize_session,
)
from tea_tracker.app_logging import configure_logging
from tea_tracker.containers import AppContainer
from tea_tracker.services.entries import EntryError, EntryLine


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Tea Tracker")
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/report")
    async def report(
        request: Request, start: str | None = None, end: str | None = None
    ) -> dict[str, object]:
        """Return the company and employee bills for a date range."""
        state_container: AppContainer = request.app.state.container
        result = state_container.report_service.weekly_report(start, end)
        return serialize_report(result)

    @app.post("/employees/{employee_id}/adjustments")
    async def adjust_today(
        employee_id: str, body: AdjustmentRequest, request: Request
    ) -> dict[str, object]:
        """Move snack units to or from today's company bill."""
        state_container: AppContainer = request.app.state.container
        service = state_container.report_service
        result = service.adjust_today(employee_id, body.delta, body.start, body.end)
        today_key = service.today().isoformat()
        return {
            "applied": result.applied,
            "reason": result.reason,
            "today_adjustment_count": result.adjustments.get(today_key, {}).get(
                employee_id, 0
            ),
        }

    @app.post("/entries", status_code=status.HTTP_201_CREATED)
    async def create_entry(body: EntryRequest, request: Request) -> dict[str, object]:
        """Log a drink and snacks for an employee."""
        state_container: AppContainer = request.app.state.container
        try:
            records = state_container.entry_service.record_entry(
                employee_id=body.employee_id,
                drink=_to_line(body.drink) if body.drink else None,
                snacks=[_to_line(line) for line in body.snacks],
            )
        except EntryError as exc:
            logger.info("Entry rejected: %s", exc)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return {"items": [serialize_consumption(record) for record in records]}

    @app.get("/entries/today")
    async def todays_entries(request: Request) -> dict[str, object]:
        """Return today's activity feed grouped into sessions."""
        state_container: AppContainer = request.app.state.container
        sessions = state_container.entry_service.todays_sessions()
        return {"sessions": [serialize_session(session) for session in sessions]}

    @app.delete("/sessions")
    async def delete_session(body: SessionKey, request: Request) -> dict[str, int]:
        """Delete every record of one logged session.

        ``logged_at`` must be the session timestamp exactly as the feed returned it.
        """
        state_container: AppContainer = request.app.state.container
        removed = state_container.entry_service.remove_session(
            body.employee_id, body.logged_at
        )
        if not removed:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"removed": removed}

    return app


def _to_line(model: EntryLineModel) -> EntryLine:
    return EntryLine(item_id=model.item_id, price=model.price)
