from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from employee_facade.models.employee import Employee, EmployeeCreationRequest
from employee_facade.services.employee_service import employee_service

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=list[Employee])
async def list_employees():
    return await employee_service.get_all_employees()


@router.get("/search/{search_string}", response_model=list[Employee])
async def search_employees(search_string: str):
    employees = await employee_service.search_employees_by_name(search_string)
    if not employees:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No employees named '{search_string}'",
        )
    return employees


@router.get("/highestSalary", response_model=int)
async def highest_salary():
    salary = await employee_service.get_highest_salary()
    if salary is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No employees found",
        )
    return salary


@router.get("/topTenHighestEarningEmployeeNames", response_model=list[str])
async def top_ten_highest_earning_employee_names():
    return await employee_service.get_top_earner_names()


@router.get("/{employee_id}", response_model=Employee)
async def get_employee(employee_id: str):
    employee = await employee_service.get_employee_by_id(employee_id)
    if employee is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee with id '{employee_id}' not found",
        )
    return employee


@router.post("", response_model=Employee, status_code=status.HTTP_201_CREATED)
async def create_employee(creation: EmployeeCreationRequest):
    return await employee_service.create_employee(creation)


@router.delete("/{employee_id}", response_model=str, status_code=status.HTTP_410_GONE)
async def delete_employee(employee_id: str):
    name = await employee_service.delete_employee_by_id(employee_id)
    if name is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee with id '{employee_id}' not found",
        )
    return name
