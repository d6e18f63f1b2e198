"""Employee directory facade over the upstream employee API."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from employee_facade.models.employee import Employee, EmployeeCreationRequest, EmployeeDeletionRequest
from employee_facade.services.employee_api_client import (
    EmployeeApiClient,
    UpstreamProtocolError,
    employee_api_client,
)

logger = logging.getLogger(__name__)

TOP_EARNERS_LIMIT = 10

# Upstream field names → Employee attribute names
_FIELD_MAP: list[tuple[str, str]] = [
    ("id", "id"),
    ("name", "employee_name"),
    ("salary", "employee_salary"),
    ("age", "employee_age"),
    ("title", "employee_title"),
    ("email", "employee_email"),
]


class EmployeeService:
    def __init__(self, client: EmployeeApiClient | None = None) -> None:
        self.client = client or employee_api_client

    async def get_all_employees(self) -> list[Employee]:
        raw_employees = await self.client.list_employees()
        return [self._transform_employee(raw) for raw in raw_employees]

    async def search_employees_by_name(self, name: str) -> list[Employee]:
        """Exact, case-sensitive match on name. Upstream order is kept."""
        return [employee for employee in await self.get_all_employees() if employee.name == name]

    async def get_employee_by_id(self, employee_id: str) -> Employee | None:
        raw = await self.client.get_employee(employee_id)
        if raw is None:
            return None
        return self._transform_employee(raw)

    async def get_highest_salary(self) -> int | None:
        employees = await self.get_all_employees()
        return max((employee.salary for employee in employees), default=None)

    async def get_top_earner_names(self, limit: int = TOP_EARNERS_LIMIT) -> list[str]:
        """Names of the ``limit`` best paid employees, highest salary first.

        Equal salaries are not tie-broken: they keep the order the upstream
        listed them in, and the upstream does not promise a stable order. Two
        employees sharing the salary at the cut-off may therefore swap in and
        out between calls.
        """
        employees = await self.get_all_employees()
        ranked = sorted(employees, key=lambda employee: employee.salary, reverse=True)
        return [employee.name for employee in ranked[:limit]]

    async def create_employee(self, creation: EmployeeCreationRequest) -> Employee:
        raw = await self.client.create_employee(creation)
        return self._transform_employee(raw)

    async def delete_employee_by_id(self, employee_id: str) -> str | None:
        """Delete the employee with ``employee_id`` and return its name.

        The upstream only deletes by name and removes the first record it finds
        with that name. When several employees share the name, the record
        removed may not be the one ``employee_id`` points at.
        """
        employee = await self.get_employee_by_id(employee_id)
        if employee is None:
            logger.info("Employee %s not found, nothing deleted", employee_id)
            return None

        await self.client.delete_employee(EmployeeDeletionRequest(name=employee.name))
        logger.info("Deleted employee %s by name %r", employee_id, employee.name)
        return employee.name

    def _transform_employee(self, raw: Any) -> Employee:
        if not isinstance(raw, dict):
            raise UpstreamProtocolError(f"Employee record is not an object: {raw!r}")

        data: dict[str, Any] = {}
        for python_key, upstream_key in _FIELD_MAP:
            data[python_key] = raw.get(upstream_key)

        try:
            return Employee(**data)
        except ValidationError as err:
            raise UpstreamProtocolError(f"Malformed employee record: {raw!r}") from err


employee_service = EmployeeService()
