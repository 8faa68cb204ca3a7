# path: warehouse/inventory/views/inventory.py
from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from warehouse.app_logging import get_logger
from warehouse.core.config import settings
from warehouse.core.dependencies import get_inventory_service
from warehouse.core.exceptions import InventoryError
from warehouse.inventory.models.enums import ItemStatus
from warehouse.inventory.schemas.item import ItemCreate, ItemUpdate
from warehouse.inventory.services.codes import normalize_prefix
from warehouse.inventory.services.inventory_service import InventoryService

router = APIRouter()
log = get_logger("views.inventory")

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def _flash(request: Request, kind: str, text: str) -> None:
    request.session["alert"] = {"kind": kind, "text": text}


def _back(request: Request, department: str) -> RedirectResponse:
    url = request.url_for("home")
    if department:
        url = url.include_query_params(department=department)
    return RedirectResponse(url=str(url), status_code=status.HTTP_303_SEE_OTHER)


def _validation_text(e: ValidationError) -> str:
    fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
    if "stock" in fields:
        return "Stock must be a whole number, 0 or more."
    return "Invalid input: " + ", ".join(fields)


@router.get("/", name="home")
def index_html(
    request: Request,
    service: Annotated[InventoryService, Depends(get_inventory_service)],
    department: Optional[str] = None,
):
    alert = request.session.pop("alert", None)
    ctx: dict[str, Any] = {
        "title": settings.site.title,
        "departments": [],
        "selected": "",
        "prefix": "",
        "items": [],
        "low_count": 0,
        "auto_code": settings.inventory.auto_code,
        "threshold": settings.inventory.low_stock_threshold,
        "alert": alert,
    }

    try:
        departments = service.list_departments()
        selected = (department or "").strip() or (departments[0] if departments else "")
        items = service.list_items(selected) if selected else []
    except InventoryError as e:
        log.info({"event": "open_page_failed", "path": "/", "error": e.message})
        ctx["alert"] = {"kind": "error", "text": e.message}
        return templates.TemplateResponse(request, "inventory/index.html", ctx, status_code=e.status_code)

    ctx.update(
        departments=departments,
        selected=selected,
        prefix=normalize_prefix(selected),
        items=items,
        low_count=sum(1 for i in items if i.status == ItemStatus.LOW.value),
    )
    log.info({"event": "open_page", "path": "/", "method": "GET", "department": selected, "count": len(items)})
    return templates.TemplateResponse(request, "inventory/index.html", ctx)


@router.post("/items/add", name="item_add_html")
def item_add_html(
    request: Request,
    service: Annotated[InventoryService, Depends(get_inventory_service)],
    department: Annotated[str, Form()] = "",
    name: Annotated[str, Form()] = "",
    category: Annotated[str, Form()] = "",
    unit: Annotated[str, Form()] = "",
    image: Annotated[str, Form()] = "",
    stock: Annotated[str, Form()] = "",
    code: Annotated[str, Form()] = "",
):
    try:
        data = ItemCreate(
            department=department, name=name, category=category,
            unit=unit, image=image, stock=stock, code=code,
        )
        result = service.add_item(data)
    except ValidationError as e:
        _flash(request, "error", _validation_text(e))
    except InventoryError as e:
        _flash(request, "error", e.message)
    else:
        _flash(request, "success", f"Item added: {result.code}")
    return _back(request, department.strip())


@router.post("/items/update", name="item_update_html")
def item_update_html(
    request: Request,
    service: Annotated[InventoryService, Depends(get_inventory_service)],
    original_code: Annotated[str, Form()] = "",
    code: Annotated[str, Form()] = "",
    department: Annotated[str, Form()] = "",
    name: Annotated[str, Form()] = "",
    category: Annotated[str, Form()] = "",
    unit: Annotated[str, Form()] = "",
    image: Annotated[str, Form()] = "",
    stock: Annotated[str, Form()] = "",
):
    try:
        data = ItemUpdate(
            original_code=original_code, code=code, department=department, name=name,
            category=category, unit=unit, image=image, stock=stock,
        )
        service.update_item(data)
    except ValidationError as e:
        _flash(request, "error", _validation_text(e))
    except InventoryError as e:
        _flash(request, "error", e.message)
    else:
        _flash(request, "success", f"Item updated: {code.strip()}")
    return _back(request, department.strip())


@router.post("/items/delete", name="item_delete_html")
def item_delete_html(
    request: Request,
    service: Annotated[InventoryService, Depends(get_inventory_service)],
    code: Annotated[str, Form()] = "",
    department: Annotated[str, Form()] = "",
):
    try:
        service.delete_item(code, department)
    except InventoryError as e:
        _flash(request, "error", e.message)
    else:
        _flash(request, "success", f"Item deleted: {code.strip()}")
    return _back(request, department.strip())
