import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hr_admin import __version__
from hr_admin.api import employees
from hr_admin.core.config import settings
from hr_admin.core.database import Database
from hr_admin.core.resilience import ResilientExecutor
from hr_admin.core.security import pwd_context
from hr_admin.services.employee_service import EmployeeService
from hr_admin.services.id_generator import EmployeeIdGenerator

handlers = [logging.StreamHandler()]
if settings.LOG_FILE:
    handlers.append(logging.FileHandler(settings.LOG_FILE))

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=handlers,
)
logger = logging.getLogger(__name__)


def build_employee_service(database: Database) -> EmployeeService:
    executor = ResilientExecutor(
        database,
        retries=settings.DB_RETRIES,
        initial_delay_ms=settings.DB_RETRY_INITIAL_DELAY_MS,
    )
    id_generator = EmployeeIdGenerator(
        executor,
        prefix=settings.EMP_ID_PREFIX,
        pad=settings.EMP_ID_PAD,
    )
    return EmployeeService(executor, id_generator, pwd_context)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting server...")

    database = Database.from_settings(settings)
    database.init()
    try:
        await database.connect()
        logger.info("Database connected")
    except Exception as e:
        # Requests retry the connection themselves
        logger.warning(f"Initial database connect failed: {str(e)}")

    app.state.database = database
    app.state.employee_service = build_employee_service(database)

    yield

    logger.info("Shutting down, closing connections...")
    try:
        await database.close()
    except Exception as e:
        logger.error(f"Error during shutdown: {str(e)}")


app = FastAPI(
    title="HR Admin API",
    description="Employee records for the HR, payroll and asset admin console",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Input values are left out of the message; bodies may carry tempPassword
    problems = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    logger.warning(f"Rejected {request.method} {request.url.path}: {problems}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": "Invalid request: " + "; ".join(problems)},
    )


app.include_router(employees.router)


@app.get("/", tags=["health"])
async def health_check():
    return {
        "status": "ok",
        "message": "Server is running",
        "version": __version__,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("hr_admin.main:app", host="0.0.0.0", port=8000, reload=True)
