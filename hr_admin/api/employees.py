import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status

from hr_admin.core.decorators import log_execution_time, log_requests
from hr_admin.core.exceptions import HRAdminError
from hr_admin.schemas.schema import (
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
    ErrorResponse,
    SuccessResponse,
)
from hr_admin.services.employee_service import EmployeeService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/employees",
    tags=["employees"],
    responses={500: {"model": ErrorResponse}},
)


def get_employee_service(request: Request) -> EmployeeService:
    return request.app.state.employee_service


def _server_error(message: str, error: Exception) -> HTTPException:
    # Domain errors carry a message meant for operators; anything else is
    # reported generically.
    detail = str(error) if isinstance(error, HRAdminError) else message
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


@router.get("", response_model=List[EmployeeResponse])
@log_requests
@log_execution_time
async def list_employees(
    request: Request,
    service: EmployeeService = Depends(get_employee_service),
):
    try:
        return await service.get_all()
    except Exception as e:
        logger.error(f"GET employees error: {str(e)}")
        raise _server_error("Failed to fetch employees", e)


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
@log_requests
@log_execution_time
async def create_employee(
    request: Request,
    employee: EmployeeCreate,
    service: EmployeeService = Depends(get_employee_service),
):
    try:
        return await service.create(employee)
    except Exception as e:
        logger.error(f"POST employee error: {str(e)}")
        raise _server_error("Failed to create employee", e)


@router.get("/{employee_id}", response_model=EmployeeResponse, responses={404: {"model": ErrorResponse}})
@log_requests
@log_execution_time
async def get_employee(
    request: Request,
    employee_id: uuid.UUID,
    service: EmployeeService = Depends(get_employee_service),
):
    try:
        employee = await service.get_by_id(employee_id)
    except Exception as e:
        logger.error(f"GET employee error: {str(e)}")
        raise _server_error("Server error", e)

    if employee is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return employee


@router.put("/{employee_id}", response_model=EmployeeResponse)
@log_requests
@log_execution_time
async def update_employee(
    request: Request,
    employee_id: uuid.UUID,
    employee: EmployeeUpdate,
    service: EmployeeService = Depends(get_employee_service),
):
    try:
        return await service.update(employee_id, employee)
    except Exception as e:
        logger.error(f"PUT employee error: {str(e)}")
        raise _server_error("Server error", e)


@router.delete("/{employee_id}", response_model=SuccessResponse)
@log_requests
@log_execution_time
async def delete_employee(
    request: Request,
    employee_id: uuid.UUID,
    service: EmployeeService = Depends(get_employee_service),
):
    try:
        await service.delete(employee_id)
    except Exception as e:
        logger.error(f"DELETE employee error: {str(e)}")
        raise _server_error("Server error", e)
    return SuccessResponse(success=True)
