from __future__ import annotations

import pytest
from pydantic import ValidationError

from employee_facade.models.employee import (
    Employee,
    EmployeeCreationRequest,
    EmployeeDeletionRequest,
    validate_creation_request,
    validation_messages,
)


def _creation(**overrides) -> dict:
    data = {"name": "Joe Denver", "salary": 483648, "age": 66, "title": "Software Engineer"}
    data.update(overrides)
    return data


def test_creation_request_accepts_valid_input():
    request = EmployeeCreationRequest(**_creation())

    assert request.name == "Joe Denver"
    assert request.salary == 483648
    assert request.age == 66
    assert request.title == "Software Engineer"


def test_creation_request_rejects_empty_name():
    with pytest.raises(ValidationError, match="name can not be empty"):
        EmployeeCreationRequest(name="", salary=100, age=25, title="x")


def test_creation_request_rejects_blank_name():
    with pytest.raises(ValidationError, match="name can not be empty"):
        EmployeeCreationRequest(**_creation(name="   "))


def test_creation_request_rejects_zero_salary():
    with pytest.raises(ValidationError, match="salary must be greater than zero"):
        EmployeeCreationRequest(name="x", salary=0, age=25, title="x")


def test_creation_request_rejects_negative_salary():
    with pytest.raises(ValidationError, match="salary must be greater than zero"):
        EmployeeCreationRequest(**_creation(salary=-1))


@pytest.mark.parametrize("age", [15, 76])
def test_creation_request_rejects_age_out_of_range(age):
    with pytest.raises(ValidationError, match="age should be between 16 and 75"):
        EmployeeCreationRequest(name="x", salary=1, age=age, title="x")


@pytest.mark.parametrize("age", [16, 75])
def test_creation_request_accepts_boundary_ages(age):
    assert EmployeeCreationRequest(name="x", salary=1, age=age, title="x").age == age


def test_creation_request_rejects_blank_title():
    with pytest.raises(ValidationError, match="title can not be empty"):
        EmployeeCreationRequest(**_creation(title=" "))


def test_creation_request_is_immutable():
    request = EmployeeCreationRequest(**_creation())

    with pytest.raises(ValidationError):
        request.name = "Someone Else"


def test_creation_request_dump_has_no_email():
    assert set(EmployeeCreationRequest(**_creation()).model_dump()) == {"name", "salary", "age", "title"}


def test_validate_creation_request_returns_request():
    result = validate_creation_request(_creation())

    assert isinstance(result, EmployeeCreationRequest)
    assert result.name == "Joe Denver"


def test_validate_creation_request_returns_messages():
    result = validate_creation_request(_creation(name="", salary=0))

    assert result == ["name can not be empty", "salary must be greater than zero"]


def test_validate_creation_request_reports_missing_fields():
    result = validate_creation_request({"name": "x"})

    assert isinstance(result, list)
    assert len(result) == 3


def test_validation_messages_keys_by_field():
    with pytest.raises(ValidationError) as exc_info:
        EmployeeCreationRequest(**_creation(age=90))

    assert validation_messages(exc_info.value.errors()) == {"age": "age should be between 16 and 75"}


def test_employee_email_is_optional():
    employee = Employee(id="1", name="Mary", salary=10, age=20, title="Artist")

    assert employee.email is None


def test_employee_requires_name():
    with pytest.raises(ValidationError):
        Employee(id="1", name="", salary=10, age=20, title="Artist")


def test_deletion_request_dumps_name_only():
    assert EmployeeDeletionRequest(name="Mary").model_dump() == {"name": "Mary"}
