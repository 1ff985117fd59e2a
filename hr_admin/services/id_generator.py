# hr_admin/services/id_generator.py
import logging
from typing import Any, Optional

from sqlalchemy import Sequence, select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from hr_admin.core.exceptions import EmployeeIdGenerationError
from hr_admin.core.resilience import ResilientExecutor, is_transient
from hr_admin.models.model import employee_number_seq

logger = logging.getLogger(__name__)


def format_employee_id(value: Any, prefix: str = "LK", pad: int = 3) -> str:
    """Turn a sequence value into a business id: 7 -> LK007, 1234 -> LK1234."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise EmployeeIdGenerationError(
            f"Failed to get sequence value ({employee_number_seq.name}): got {value!r}"
        )
    # int() truncates 7.9 to 7; a fractional sequence value is a misconfiguration
    if number <= 0 or (not isinstance(value, str) and number != value):
        raise EmployeeIdGenerationError(
            f"Failed to get sequence value ({employee_number_seq.name}): got {value!r}"
        )
    return f"{prefix}{str(number).zfill(pad)}"


class EmployeeIdGenerator:
    def __init__(
        self,
        executor: ResilientExecutor,
        prefix: str = "LK",
        pad: int = 3,
        sequence: Sequence = employee_number_seq,
    ):
        self.executor = executor
        self.prefix = prefix
        self.pad = pad
        self.sequence = sequence

    async def _next_value(self, session: AsyncSession) -> Any:
        return await session.scalar(select(self.sequence.next_value()))

    async def next_employee_id(self, prefix: Optional[str] = None, pad: Optional[int] = None) -> str:
        try:
            value = await self.executor.execute(self._next_value)
        except DBAPIError as e:
            if is_transient(e):
                raise
            logger.error(f"Sequence {self.sequence.name} is unusable: {str(e)}")
            raise EmployeeIdGenerationError(
                f"Failed to get sequence value ({self.sequence.name})"
            ) from e

        emp_id = format_employee_id(
            value,
            self.prefix if prefix is None else prefix,
            self.pad if pad is None else pad,
        )
        logger.debug(f"Generated employee id {emp_id}")
        return emp_id
