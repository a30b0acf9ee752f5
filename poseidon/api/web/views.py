"""Rendering helpers shared by the CRUD pages."""

from collections.abc import Mapping, Sequence
from typing import Any

from fastapi import Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from poseidon.core.templates import templates
from poseidon.schemas.forms import FormField

NOT_FOUND_FLAG = "notfound"


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)


def redirect_not_found(list_url: str) -> RedirectResponse:
    """Back to a list view carrying the not-found indicator."""
    return redirect(f"{list_url}?{NOT_FOUND_FLAG}")


def render_list(
    request: Request,
    *,
    resource: str,
    title: str,
    columns: Sequence[FormField],
    records: Sequence[Any],
    not_found_message: str,
) -> HTMLResponse:
    message = not_found_message if NOT_FOUND_FLAG in request.query_params else None
    return templates.TemplateResponse(
        request,
        "crud/list.html",
        {
            "resource": resource,
            "title": title,
            "columns": columns,
            "records": records,
            "error_message": message,
        },
    )


def render_form(
    request: Request,
    *,
    resource: str,
    title: str,
    fields: Sequence[FormField],
    action: str,
    values: Mapping[str, Any] | None = None,
    errors: Mapping[str, str] | None = None,
    error_message: str | None = None,
    record_id: int | None = None,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "crud/form.html",
        {
            "resource": resource,
            "title": title,
            "fields": fields,
            "action": action,
            "values": values or {},
            "errors": errors or {},
            "error_message": error_message,
            "record_id": record_id,
        },
    )
