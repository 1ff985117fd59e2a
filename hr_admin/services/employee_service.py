# hr_admin/services/employee_service.py
import logging
import uuid
from typing import Any, Dict, Iterable, List, Optional

from passlib.context import CryptContext
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_admin.core.datetime_utils import to_datetime_or_none
from hr_admin.core.exceptions import EmployeeNotFoundError
from hr_admin.core.resilience import ResilientExecutor
from hr_admin.core.security import prepare_temp_credential
from hr_admin.models.model import Education, Employee
from hr_admin.schemas.schema import EmployeeCreate, EmployeeFields, EmployeeUpdate
from hr_admin.services.id_generator import EmployeeIdGenerator

logger = logging.getLogger(__name__)

SCALAR_FIELDS = (
    "first_name",
    "last_name",
    "gender",
    "aadhaar_number",
    "pan_number",
    "email",
    "phone_number",
    "emergency_contact",
    "photo",
    "blood_group",
    "present_address",
    "permanent_address",
    "designation",
    "department",
    "work_location",
    "bank_name",
    "account_number",
    "ifsc_code",
)
DATE_FIELDS = ("date_of_birth", "date_of_joining")
EDUCATION_FIELDS = ("education", "education_details")


def _clean(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def employee_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """Column values for the scalar and date keys present in ``data``."""
    fields = {}
    for name in SCALAR_FIELDS:
        if name in data:
            fields[name] = _clean(data[name])
    for name in DATE_FIELDS:
        if name in data:
            fields[name] = to_datetime_or_none(data[name])
    return fields


def education_rows(payload: EmployeeFields) -> Optional[List[Dict[str, Any]]]:
    """Education rows sent with the payload, or None when no list was sent.

    ``education`` wins over the legacy ``educationDetails`` key. Entries with
    no institution, qualification or university are dropped.
    """
    items = None
    for name in EDUCATION_FIELDS:
        if name in payload.model_fields_set and getattr(payload, name) is not None:
            items = getattr(payload, name)
            break
    if items is None:
        return None

    rows = []
    for item in items:
        if item is None:
            continue
        if not (_clean(item.institution) or _clean(item.qualification) or _clean(item.university)):
            continue
        year = _clean(item.year_completed)
        rows.append({
            "institution": _clean(item.institution),
            "university": _clean(item.university),
            "qualification": _clean(item.qualification),
            "year_completed": None if year is None else str(year),
        })
    return rows


def _dump(payload: EmployeeFields) -> Dict[str, Any]:
    return payload.model_dump(exclude_unset=True, exclude=set(EDUCATION_FIELDS))


async def _load(session: AsyncSession, employee_id: uuid.UUID) -> Optional[Employee]:
    result = await session.execute(
        select(Employee)
        .options(selectinload(Employee.education_details))
        .where(Employee.id == employee_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


class EmployeeService:
    """Employee CRUD on top of the resilient executor.

    Every store round-trip goes through ``executor.execute`` so callers only
    ever see a result or a terminal, non-retryable error.
    """

    def __init__(
        self,
        executor: ResilientExecutor,
        id_generator: Optional[EmployeeIdGenerator] = None,
        password_context: Optional[CryptContext] = None,
    ):
        self.executor = executor
        self.id_generator = id_generator or EmployeeIdGenerator(executor)
        self.password_context = password_context

    async def create(self, payload: EmployeeCreate) -> Employee:
        data = _dump(payload)
        fields = employee_fields(data)
        educations = education_rows(payload) or []

        emp_id = await self.id_generator.next_employee_id()

        temp_password = data.pop("temp_password", None)
        payload.temp_password = None
        try:
            credential = prepare_temp_credential(temp_password, self.password_context)
        finally:
            del temp_password

        auth_fields = {"password": None, "changed_temp_password": False}
        if credential is not None:
            auth_fields.update(credential.as_fields())

        async def create_employee(session: AsyncSession) -> Employee:
            employee = Employee(
                **fields,
                emp_id=emp_id,
                **auth_fields,
                education_details=[Education(**row) for row in educations],
            )
            session.add(employee)
            await session.flush()
            return await _load(session, employee.id)

        created = await self.executor.execute(create_employee)
        logger.info(f"Employee {created.emp_id} created with {len(educations)} education rows")
        return created

    async def get_all(self) -> List[Employee]:
        # No pagination; fine at the expected headcount.
        async def list_employees(session: AsyncSession) -> List[Employee]:
            result = await session.execute(
                select(Employee)
                .options(selectinload(Employee.education_details))
                .order_by(Employee.created_at.desc())
            )
            return list(result.scalars().all())

        return await self.executor.execute(list_employees)

    async def get_by_id(self, employee_id: uuid.UUID) -> Optional[Employee]:
        async def get_employee(session: AsyncSession) -> Optional[Employee]:
            return await _load(session, employee_id)

        return await self.executor.execute(get_employee)

    async def update(self, employee_id: uuid.UUID, payload: EmployeeUpdate) -> Employee:
        fields = employee_fields(_dump(payload))
        educations = education_rows(payload)

        async def update_employee(session: AsyncSession) -> Employee:
            exists = await session.scalar(select(Employee.id).where(Employee.id == employee_id))
            if exists is None:
                raise EmployeeNotFoundError(employee_id)

            if fields:
                await session.execute(
                    update(Employee).where(Employee.id == employee_id).values(**fields)
                )

            if educations is not None:
                await _replace_education(session, employee_id, educations)

            return await _load(session, employee_id)

        updated = await self.executor.execute(update_employee)
        logger.info(f"Employee {updated.emp_id} updated: {sorted(fields)}")
        return updated

    async def delete(self, employee_id: uuid.UUID) -> None:
        async def delete_employee(session: AsyncSession) -> None:
            await session.execute(delete(Education).where(Education.employee_id == employee_id))
            result = await session.execute(delete(Employee).where(Employee.id == employee_id))
            if result.rowcount == 0:
                raise EmployeeNotFoundError(employee_id)

        await self.executor.execute(delete_employee)
        logger.info(f"Employee {employee_id} deleted")


async def _replace_education(
    session: AsyncSession,
    employee_id: uuid.UUID,
    rows: Iterable[Dict[str, Any]],
) -> None:
    """Delete every education row of the employee, then insert ``rows``."""
    await session.execute(delete(Education).where(Education.employee_id == employee_id))
    session.add_all([Education(employee_id=employee_id, **row) for row in rows])
    await session.flush()
