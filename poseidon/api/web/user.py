"""User administration pages (ADMIN only). Passwords go through encode-on-write."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from poseidon.api.deps import get_session_registry, get_user_service
from poseidon.api.web.views import redirect, redirect_not_found, render_form, render_list
from poseidon.core.database import get_db
from poseidon.core.sessions import SessionRegistry
from poseidon.schemas.user import UserCreateForm, UserUpdateForm
from poseidon.services.user_service import DuplicateUsernameError, UserService

logger = logging.getLogger(__name__)

router = APIRouter()

RESOURCE = "user"
TITLE = "Users"
LIST_URL = "/user/list"
NOT_FOUND_MESSAGE = "User not found."

CREATE_FIELDS = UserCreateForm.describe_fields()
UPDATE_FIELDS = UserUpdateForm.describe_fields()
# Never show the digest column.
LIST_COLUMNS = [f for f in CREATE_FIELDS if f.attr != "password"]


@router.get("/list", response_class=HTMLResponse)
def list_users(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    users: Annotated[UserService, Depends(get_user_service)],
) -> HTMLResponse:
    return render_list(
        request,
        resource=RESOURCE,
        title=TITLE,
        columns=LIST_COLUMNS,
        records=users.list_all(db),
        not_found_message=NOT_FOUND_MESSAGE,
    )


@router.get("/add", response_class=HTMLResponse)
def add_user_form(request: Request) -> HTMLResponse:
    return render_form(
        request,
        resource=RESOURCE,
        title=TITLE,
        fields=CREATE_FIELDS,
        action="/user/validate",
    )


@router.post("/validate", response_model=None)
async def validate(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    users: Annotated[UserService, Depends(get_user_service)],
) -> HTMLResponse | RedirectResponse:
    """Create an account; the submitted password is encoded before it is stored."""
    data = await request.form()
    form, errors = UserCreateForm.parse_form(data)
    error_message = None
    if form is not None:
        try:
            users.create_from_form(db, form)
            return redirect(LIST_URL)
        except DuplicateUsernameError as e:
            error_message = e.message
    values = UserCreateForm.field_values(data)
    values.pop("password", None)
    return render_form(
        request,
        resource=RESOURCE,
        title=TITLE,
        fields=CREATE_FIELDS,
        action="/user/validate",
        values=values,
        errors=errors,
        error_message=error_message,
    )


@router.get("/update/{user_id}", response_model=None)
def update_user_form(
    user_id: int,
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    users: Annotated[UserService, Depends(get_user_service)],
) -> HTMLResponse | RedirectResponse:
    """Edit form pre-filled from the account; the password input is always blank."""
    user = users.find_by_id(db, user_id)
    if user is None:
        return redirect_not_found(LIST_URL)
    values = UserUpdateForm.values_from(user)
    values["password"] = ""
    return render_form(
        request,
        resource=RESOURCE,
        title=TITLE,
        fields=UPDATE_FIELDS,
        action=f"/user/update/{user_id}",
        values=values,
        record_id=user_id,
    )


@router.post("/update/{user_id}", response_model=None)
async def update_user(
    user_id: int,
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    users: Annotated[UserService, Depends(get_user_service)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> HTMLResponse | RedirectResponse:
    """
    Apply an edit. A blank password keeps the stored digest.

    Changing the username or role ends the account's live session.
    """
    data = await request.form()
    form, errors = UserUpdateForm.parse_form(data)
    error_message = None
    if form is not None:
        user = users.find_by_id(db, user_id)
        if user is None:
            return redirect_not_found(LIST_URL)
        previous = (user.username, user.role)
        try:
            updated = users.update_from_form(db, user_id, form)
        except DuplicateUsernameError as e:
            error_message = e.message
        else:
            if (updated.username, updated.role) != previous:
                registry.invalidate_user(previous[0])
                logger.info("Ended session after identity change: username=%s", previous[0])
            return redirect(LIST_URL)
    values = UserUpdateForm.field_values(data)
    values["password"] = ""
    return render_form(
        request,
        resource=RESOURCE,
        title=TITLE,
        fields=UPDATE_FIELDS,
        action=f"/user/update/{user_id}",
        values=values,
        errors=errors,
        error_message=error_message,
        record_id=user_id,
    )


@router.get("/delete/{user_id}")
def delete_user(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    users: Annotated[UserService, Depends(get_user_service)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> RedirectResponse:
    """Delete an account and end its live session, if any."""
    user = users.find_by_id(db, user_id)
    if user is None:
        return redirect_not_found(LIST_URL)
    username = user.username
    users.delete_by_id(db, user_id)
    registry.invalidate_user(username)
    return redirect(LIST_URL)
