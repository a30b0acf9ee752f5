"""Pydantic form and response schemas."""

from poseidon.schemas.auth import Principal
from poseidon.schemas.forms import FormModel
from poseidon.schemas.health import HealthResponse
from poseidon.schemas.reference import (
    BidListForm,
    CurvePointForm,
    RatingForm,
    RuleNameForm,
    TradeForm,
)
from poseidon.schemas.user import Role, UserCreateForm, UserUpdateForm

__all__ = [
    "BidListForm",
    "CurvePointForm",
    "FormModel",
    "HealthResponse",
    "Principal",
    "RatingForm",
    "Role",
    "RuleNameForm",
    "TradeForm",
    "UserCreateForm",
    "UserUpdateForm",
]
