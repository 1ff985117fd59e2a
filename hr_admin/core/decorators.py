import asyncio
import functools
import logging
import time
import uuid

from fastapi import Request

logger = logging.getLogger(__name__)


def log_execution_time(func):
    @functools.wraps(func)
    async def async_wrapper(*args, **kwargs):
        start_time = time.time()
        try:
            result = await func(*args, **kwargs)
            elapsed = time.time() - start_time
            logger.info(f"{func.__name__} took {elapsed:.4f}s")
            return result
        except Exception as e:
            elapsed = time.time() - start_time
            logger.error(f"{func.__name__} failed after {elapsed:.4f}s: {str(e)}")
            raise

    @functools.wraps(func)
    def sync_wrapper(*args, **kwargs):
        start_time = time.time()
        try:
            result = func(*args, **kwargs)
            elapsed = time.time() - start_time
            logger.info(f"{func.__name__} took {elapsed:.4f}s")
            return result
        except Exception as e:
            elapsed = time.time() - start_time
            logger.error(f"{func.__name__} failed after {elapsed:.4f}s: {str(e)}")
            raise

    return async_wrapper if asyncio.iscoroutinefunction(func) else sync_wrapper


def log_requests(func):
    """Log method, path and outcome of a route handler.

    Request bodies are never logged; they may carry temporary passwords.
    """
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        request = kwargs.get("request")
        if request is None:
            request = next((arg for arg in args if isinstance(arg, Request)), None)

        request_id = uuid.uuid4().hex[:12]

        if request is not None:
            client_ip = request.client.host if request.client else "unknown"
            logger.info(f"REQ {request_id}: {request.method} {request.url.path} from {client_ip}")
        else:
            logger.info(f"FUNC {request_id}: {func.__name__} called")

        start_time = time.time()
        try:
            result = await func(*args, **kwargs)
            elapsed = time.time() - start_time
            logger.info(f"DONE {request_id}: completed in {elapsed:.4f}s")
            return result
        except Exception as e:
            elapsed = time.time() - start_time
            logger.error(f"FAIL {request_id}: error after {elapsed:.4f}s - {str(e)}")
            raise

    return wrapper
