# hr_admin/core/resilience.py
import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from sqlalchemy.exc import DataError, DBAPIError, DisconnectionError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hr_admin.core.database import Database

logger = logging.getLogger(__name__)

T = TypeVar("T")

# SQLSTATE codes for "cannot reach server" / "connection lost"
TRANSIENT_CODES = frozenset({
    "08000",  # connection_exception
    "08001",  # sqlclient_unable_to_establish_sqlconnection
    "08003",  # connection_does_not_exist
    "08004",  # sqlserver_rejected_establishment_of_sqlconnection
    "08006",  # connection_failure
    "57P01",  # admin_shutdown
    "57P02",  # crash_shutdown
    "57P03",  # cannot_connect_now
})

TRANSIENT_MARKERS = (
    "connection is closed",
    "connection was closed",
    "closed the connection",
    "connection terminated",
    "terminating connection",
    "connection reset",
    "econnreset",
    "connection refused",
    "econnrefused",
    "timed out",
)

# SQLSTATE classes for data exceptions and integrity constraint violations
APPLICATION_CODE_CLASSES = ("22", "23")


def _error_code(error: BaseException) -> Optional[str]:
    for attr in ("sqlstate", "pgcode"):
        code = getattr(error, attr, None)
        if code:
            return str(code)
    return None


def is_transient(error: Optional[BaseException]) -> bool:
    """Decide whether a data-access error is worth retrying.

    Only infrastructure faults (lost/refused/reset connections, timeouts)
    qualify. Constraint violations, missing rows and bad input never do.
    """
    if error is None:
        return False

    if isinstance(error, (IntegrityError, DataError)):
        return False

    if isinstance(error, (DisconnectionError, ConnectionError, TimeoutError, asyncio.TimeoutError)):
        return True

    # The wrapper's str() embeds the SQL and its bound parameters; only the
    # driver exception is inspected.
    driver_error = error
    if isinstance(error, DBAPIError):
        if error.connection_invalidated:
            return True
        if error.orig is None:
            return False
        driver_error = error.orig

    code = _error_code(driver_error)
    if code is not None:
        if code[:2] in APPLICATION_CODE_CLASSES:
            return False
        if code in TRANSIENT_CODES:
            return True

    message = str(driver_error).lower()
    return any(marker in message for marker in TRANSIENT_MARKERS)


def backoff_delay(attempt: int, initial_delay_ms: float) -> float:
    """Milliseconds to wait after failed attempt ``attempt`` (0-indexed)."""
    return initial_delay_ms * (2 ** attempt)


class ResilientExecutor:
    """Runs data-access operations with bounded retries on transient errors.

    Each ``execute`` call is one unit of work: the operation receives a fresh
    session that is committed when it returns and rolled back when it raises.
    """

    def __init__(
        self,
        database: Database,
        retries: int = 2,
        initial_delay_ms: float = 150,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.database = database
        self.retries = retries
        self.initial_delay_ms = initial_delay_ms
        self._sleep = sleep

    async def execute(
        self,
        operation: Callable[[AsyncSession], Awaitable[T]],
        retries: Optional[int] = None,
        initial_delay_ms: Optional[float] = None,
    ) -> T:
        retries = self.retries if retries is None else retries
        initial_delay_ms = self.initial_delay_ms if initial_delay_ms is None else initial_delay_ms
        name = getattr(operation, "__name__", repr(operation))

        attempt = 0
        last_error: Optional[BaseException] = None

        while attempt <= retries:
            if attempt > 0:
                try:
                    await self.database.connect()
                except Exception as e:
                    logger.warning(f"Reconnect before retry of {name} failed: {str(e)}")

            try:
                async with self.database.session() as session:
                    return await operation(session)
            except Exception as e:
                last_error = e
                if not is_transient(e):
                    raise

                if attempt >= retries:
                    break

                delay = backoff_delay(attempt, initial_delay_ms)
                logger.warning(
                    f"Transient DB error in {name} (attempt {attempt + 1}/{retries + 1}): "
                    f"{str(e)}. Retrying in {delay:.0f}ms"
                )
                await self._sleep(delay / 1000)
                attempt += 1

        logger.error(f"{name} exhausted {retries + 1} attempts: {str(last_error)}")
        raise last_error
