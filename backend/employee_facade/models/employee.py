"""Employee models for the upstream employee directory."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

MIN_AGE = 16
MAX_AGE = 75


class Employee(BaseModel):
    """An employee record as returned by the upstream directory."""

    model_config = {"frozen": True}

    id: str
    name: str = Field(..., min_length=1)
    salary: int
    age: int
    title: str
    email: str | None = None


class EmployeeCreationRequest(BaseModel):
    """Input for creating an employee. Email is populated by the upstream."""

    model_config = {"frozen": True}

    name: str
    salary: int
    age: int
    title: str

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name can not be empty")
        return value

    @field_validator("salary")
    @classmethod
    def _salary_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("salary must be greater than zero")
        return value

    @field_validator("age")
    @classmethod
    def _age_in_range(cls, value: int) -> int:
        if value < MIN_AGE or value > MAX_AGE:
            raise ValueError(f"age should be between {MIN_AGE} and {MAX_AGE}")
        return value

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title can not be empty")
        return value


class EmployeeDeletionRequest(BaseModel):
    """Upstream delete body. The upstream keys deletions on name, not id."""

    model_config = {"frozen": True}

    name: str


def validation_messages(errors: Iterable[Mapping[str, Any]]) -> dict[str, str]:
    """Flatten pydantic error dicts into ``{field: message}``.

    Messages raised from our own validators are reported verbatim, without
    pydantic's "Value error, " prefix.
    """
    messages: dict[str, str] = {}
    for error in errors:
        loc = error.get("loc") or ("__root__",)
        field = str(loc[-1])
        original = (error.get("ctx") or {}).get("error")
        messages[field] = str(original) if original is not None else str(error.get("msg", ""))
    return messages


def validate_creation_request(data: Mapping[str, Any]) -> EmployeeCreationRequest | list[str]:
    """Build a creation request without raising.

    Returns the validated request, or the list of validation messages when the
    input is rejected.
    """
    try:
        return EmployeeCreationRequest.model_validate(data)
    except ValidationError as err:
        return list(validation_messages(err.errors()).values())
