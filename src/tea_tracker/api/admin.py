"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from tea_tracker.api.schemas import EmployeeCreate, ItemCreate, PriceUpdate
from tea_tracker.api.serializers import serialize_employee, serialize_item
from tea_tracker.services.roster import RosterError

if TYPE_CHECKING:
    from tea_tracker.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/employees", dependencies=[Depends(require_admin)])
async def list_employees(request: Request) -> dict[str, object]:
    """Return the full roster."""
    container: AppContainer = request.app.state.container
    employees = container.roster_service.list_employees()
    return {"employees": [serialize_employee(employee) for employee in employees]}


@router.post(
    "/employees",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_201_CREATED,
)
async def add_employee(body: EmployeeCreate, request: Request) -> dict[str, object]:
    """Add an employee to the roster."""
    container: AppContainer = request.app.state.container
    try:
        employee = container.roster_service.add_employee(body.name)
    except RosterError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return serialize_employee(employee)


@router.post("/employees/{employee_id}/toggle", dependencies=[Depends(require_admin)])
async def toggle_employee(employee_id: str, request: Request) -> dict[str, object]:
    """Activate or deactivate an employee."""
    container: AppContainer = request.app.state.container
    employee = container.roster_service.toggle_employee(employee_id)
    if employee is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return serialize_employee(employee)


@router.get("/items", dependencies=[Depends(require_admin)])
async def list_items(request: Request) -> dict[str, object]:
    """Return the menu catalog."""
    container: AppContainer = request.app.state.container
    items = container.roster_service.list_items()
    return {"items": [serialize_item(item) for item in items]}


@router.post(
    "/items", dependencies=[Depends(require_admin)], status_code=status.HTTP_201_CREATED
)
async def add_item(body: ItemCreate, request: Request) -> dict[str, object]:
    """Add an item to the menu catalog."""
    container: AppContainer = request.app.state.container
    try:
        item = container.roster_service.add_item(body.name, body.price, body.item_type)
    except RosterError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return serialize_item(item)


@router.patch("/items/{item_id}/price", dependencies=[Depends(require_admin)])
async def update_price(
    item_id: str, body: PriceUpdate, request: Request
) -> dict[str, object]:
    """Change an item's default price."""
    container: AppContainer = request.app.state.container
    item = container.roster_service.update_item_price(item_id, body.price)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return serialize_item(item)


@router.post("/seed", dependencies=[Depends(require_admin)])
async def seed_defaults(request: Request) -> dict[str, int]:
    """Populate an empty roster and catalog with the office defaults."""
    container: AppContainer = request.app.state.container
    return container.roster_service.seed_defaults()
