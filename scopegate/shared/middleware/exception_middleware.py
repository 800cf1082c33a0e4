# scopegate/shared/middleware/exception_middleware.py

"""
Middleware for centralized exception handling.

This module defines middleware that intercepts exceptions and formats
appropriate error responses for the client.
"""

import time
import logging
import traceback
from typing import Callable, Dict

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from scopegate.domain.exceptions import DomainException, DatabaseOperationException
from scopegate.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)

STATUS_BY_CODE: Dict[str, int] = {
    "INVALID_REQUEST": status.HTTP_400_BAD_REQUEST,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "PERMISSION_DENIED": status.HTTP_403_FORBIDDEN,
    "RESOURCE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "RESOURCE_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "DATABASE_OPERATION_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class AsyncExceptionMiddleware(BaseHTTPMiddleware):
    """
    Middleware for centralized exception handling.
    Captures specific exceptions and formats the response accordingly.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.time()
        try:
            response = await call_next(request)
            process_time = time.time() - start_time
            response.headers["X-Process-Time"] = str(process_time)
            return response

        except DomainException as exc:
            return self._domain_response(request, exc)

        except SQLAlchemyError as exc:
            # Store failures that escaped the repositories
            if settings.ENVIRONMENT == "production":
                logger.error(
                    f"Database error: Type={type(exc).__name__} | "
                    f"Path: {request.url.path}"
                )
            else:
                logger.error(
                    f"Database error: {str(exc)} | "
                    f"Path: {request.url.path}"
                )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "detail": "Internal server error",
                    "code": DatabaseOperationException.internal_code
                }
            )

        except Exception as exc:
            # Unhandled exceptions
            if settings.ENVIRONMENT == "production":
                error_message = "Internal server error"
                logger.exception(
                    f"Unhandled exception: Type={type(exc).__name__} | "
                    f"Path: {request.url.path} | "
                    f"Client: {request.client.host if request.client else 'N/A'}"
                )
            else:
                error_message = str(exc)
                stack_trace = traceback.format_exc()
                logger.exception(
                    f"Unhandled exception: {str(exc)} | "
                    f"Path: {request.url.path} | "
                    f"Client: {request.client.host if request.client else 'N/A'}\n"
                    f"Traceback: {stack_trace}"
                )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "detail": error_message,
                    "code": "INTERNAL_SERVER_ERROR"
                }
            )

    @staticmethod
    def _domain_response(request: Request, exc: DomainException) -> JSONResponse:
        """Map a domain exception to its HTTP status through ``internal_code``."""
        status_code = STATUS_BY_CODE.get(exc.internal_code, status.HTTP_400_BAD_REQUEST)

        if isinstance(exc, DatabaseOperationException):
            logger.error(
                f"Database operation failed: {exc.original_error!r} | "
                f"Path: {request.url.path}"
            )
        else:
            logger.warning(
                f"Domain exception: {str(exc)} | Code: {exc.internal_code} | "
                f"Path: {request.url.path}"
            )

        headers = None
        if status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        return JSONResponse(
            status_code=status_code,
            content={
                "detail": str(exc),
                "code": exc.internal_code
            },
            headers=headers,
        )
