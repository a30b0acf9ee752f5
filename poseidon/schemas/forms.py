"""Base class for HTML form schemas: blank-to-None coercion and field-keyed error messages."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Self, get_args

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator


@dataclass(frozen=True)
class FormField:
    """How one schema field is rendered as an HTML input."""

    name: str
    attr: str
    label: str
    widget: str = "text"
    required: bool = False
    options: tuple[str, ...] = ()


class FormModel(BaseModel):
    """
    Pydantic model populated from submitted form fields.

    Form inputs use camelCase names (e.g. bidQuantity) given as field aliases; blank
    inputs are treated as absent so optional numeric fields do not fail parsing.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def drop_blank_values(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return {
                k: v for k, v in data.items() if not (isinstance(v, str) and not v.strip())
            }
        return data

    @classmethod
    def parse_form(cls, data: Mapping[str, Any]) -> tuple[Self | None, dict[str, str]]:
        """Validate form data. Returns (form, {}) on success or (None, errors by input name)."""
        try:
            return cls.model_validate(dict(data)), {}
        except ValidationError as e:
            return None, cls.errors_by_field(e)

    @classmethod
    def errors_by_field(cls, exc: ValidationError) -> dict[str, str]:
        """First human-readable message per input name, in field order."""
        errors: dict[str, str] = {}
        for err in exc.errors():
            loc = err.get("loc") or ("__root__",)
            key = str(loc[0])
            if key not in errors:
                errors[key] = cls._message_for(key, err)
        return errors

    @classmethod
    def field_values(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        """Raw submitted values keyed by input name, for re-rendering a rejected form."""
        names = {f.alias or n for n, f in cls.model_fields.items()}
        return {k: v for k, v in data.items() if k in names}

    @classmethod
    def _label(cls, key: str) -> str:
        for name, info in cls.model_fields.items():
            if key in (name, info.alias):
                return info.title or name.replace("_", " ").capitalize()
        return key

    @classmethod
    def _message_for(cls, key: str, err: Mapping[str, Any]) -> str:
        label = cls._label(key)
        ctx = err.get("ctx") or {}
        kind = err.get("type", "")
        if kind == "missing":
            return f"{label} is required."
        if kind in ("greater_than", "greater_than_equal"):
            return f"{label} must be a positive number."
        if kind == "string_too_long":
            return f"{label} cannot exceed {ctx.get('max_length')} characters."
        if kind == "string_too_short":
            return f"{label} must contain at least {ctx.get('min_length')} characters."
        if kind in ("float_parsing", "int_parsing", "int_from_float", "float_type", "int_type"):
            return f"{label} must be a number."
        if kind in ("datetime_parsing", "datetime_from_date_parsing", "datetime_type"):
            return f"{label} must be a date such as 2024-01-31 or 2024-01-31T09:30."
        msg = str(err.get("msg", "Invalid value."))
        return msg.removeprefix("Value error, ")

    @classmethod
    def describe_fields(cls) -> list[FormField]:
        """Input descriptors in declaration order, used by the generic form templates."""
        described = []
        for name, info in cls.model_fields.items():
            types = get_args(info.annotation) or (info.annotation,)
            widget = "text"
            options: tuple[str, ...] = ()
            if any(t in (int, float) for t in types):
                widget = "number"
            enums = [t for t in types if isinstance(t, type) and issubclass(t, Enum)]
            if enums:
                widget = "select"
                options = tuple(m.value for m in enums[0])
            extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
            described.append(
                FormField(
                    name=info.alias or name,
                    attr=name,
                    label=info.title or name,
                    widget=str(extra.get("widget", widget)),
                    required=info.is_required(),
                    options=options,
                )
            )
        return described

    @classmethod
    def values_from(cls, record: Any) -> dict[str, Any]:
        """Current record values keyed by input name, for pre-filling an edit form."""
        values = {}
        for name, info in cls.model_fields.items():
            value = getattr(record, name, None)
            values[info.alias or name] = "" if value is None else value
        return values

    def record_values(self) -> dict[str, Any]:
        """Validated values keyed by model attribute name."""
        return self.model_dump(by_alias=False)
