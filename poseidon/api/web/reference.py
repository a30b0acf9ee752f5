"""List/add/validate/update/delete pages for the reference-data records."""

from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from poseidon.api.web.views import redirect, redirect_not_found, render_form, render_list
from poseidon.core.database import get_db
from poseidon.models import BidList, CurvePoint, Rating, RuleName, Trade
from poseidon.schemas.forms import FormModel
from poseidon.schemas.reference import (
    BidListForm,
    CurvePointForm,
    RatingForm,
    RuleNameForm,
    TradeForm,
)
from poseidon.services.crud import CrudService


@dataclass(frozen=True)
class CrudResource:
    """One reference-data kind exposed at /{name}/..."""

    name: str
    title: str
    model: Any
    form: type[FormModel]
    not_found_message: str
    # Attributes shown on the list page; every form field when empty.
    list_columns: tuple[str, ...] = ()

    @property
    def list_url(self) -> str:
        return f"/{self.name}/list"


RESOURCES: tuple[CrudResource, ...] = (
    CrudResource(
        "bidList",
        "Bid List",
        BidList,
        BidListForm,
        "Bid not found.",
        list_columns=("account", "type", "bid_quantity"),
    ),
    CrudResource(
        "curvePoint",
        "Curve Points",
        CurvePoint,
        CurvePointForm,
        "Curve point not found.",
        list_columns=("curve_id", "term", "value"),
    ),
    CrudResource("rating", "Ratings", Rating, RatingForm, "Rating not found."),
    CrudResource("ruleName", "Rules", RuleName, RuleNameForm, "Rule not found."),
    CrudResource(
        "trade",
        "Trades",
        Trade,
        TradeForm,
        "Trade not found.",
        list_columns=("account", "type", "buy_quantity"),
    ),
)


def build_crud_router(resource: CrudResource) -> APIRouter:
    """Routes for one resource; the service passes validated values straight to the model."""
    router = APIRouter()
    service = CrudService(resource.model)
    fields = resource.form.describe_fields()
    columns = [f for f in fields if not resource.list_columns or f.attr in resource.list_columns]

    @router.get("/list", response_class=HTMLResponse)
    def list_records(
        request: Request,
        db: Annotated[Session, Depends(get_db)],
    ) -> HTMLResponse:
        return render_list(
            request,
            resource=resource.name,
            title=resource.title,
            columns=columns,
            records=service.list_all(db),
            not_found_message=resource.not_found_message,
        )

    @router.get("/add", response_class=HTMLResponse)
    def add_form(request: Request) -> HTMLResponse:
        return render_form(
            request,
            resource=resource.name,
            title=resource.title,
            fields=fields,
            action=f"/{resource.name}/validate",
        )

    @router.post("/validate", response_model=None)
    async def validate(
        request: Request,
        db: Annotated[Session, Depends(get_db)],
    ) -> HTMLResponse | RedirectResponse:
        data = await request.form()
        form, errors = resource.form.parse_form(data)
        if form is None:
            return render_form(
                request,
                resource=resource.name,
                title=resource.title,
                fields=fields,
                action=f"/{resource.name}/validate",
                values=resource.form.field_values(data),
                errors=errors,
            )
        service.create(db, form.record_values())
        return redirect(resource.list_url)

    @router.get("/update/{record_id}", response_model=None)
    def update_form(
        record_id: int,
        request: Request,
        db: Annotated[Session, Depends(get_db)],
    ) -> HTMLResponse | RedirectResponse:
        record = service.find_by_id(db, record_id)
        if record is None:
            return redirect_not_found(resource.list_url)
        return render_form(
            request,
            resource=resource.name,
            title=resource.title,
            fields=fields,
            action=f"/{resource.name}/update/{record_id}",
            values=resource.form.values_from(record),
            record_id=record_id,
        )

    @router.post("/update/{record_id}", response_model=None)
    async def update(
        record_id: int,
        request: Request,
        db: Annotated[Session, Depends(get_db)],
    ) -> HTMLResponse | RedirectResponse:
        data = await request.form()
        form, errors = resource.form.parse_form(data)
        if form is None:
            return render_form(
                request,
                resource=resource.name,
                title=resource.title,
                fields=fields,
                action=f"/{resource.name}/update/{record_id}",
                values=resource.form.field_values(data),
                errors=errors,
                record_id=record_id,
            )
        if service.update(db, record_id, form.record_values()) is None:
            return redirect_not_found(resource.list_url)
        return redirect(resource.list_url)

    @router.get("/delete/{record_id}")
    def delete(
        record_id: int,
        db: Annotated[Session, Depends(get_db)],
    ) -> RedirectResponse:
        if not service.delete_by_id(db, record_id):
            return redirect_not_found(resource.list_url)
        return redirect(resource.list_url)

    return router
