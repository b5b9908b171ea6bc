"""Global exception handlers turning service errors into ``{"error": message}`` responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from backend.core.errors import StorageError, WellnessError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error('Storage failure on %s %s: %s', request.method, request.url.path, exc.message, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={'error': 'Internal server error'},
        )

    @app.exception_handler(WellnessError)
    async def wellness_error_handler(request: Request, exc: WellnessError):
        return JSONResponse(status_code=exc.http_status, content={'error': exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.warning('Validation error on %s: %s', request.url.path, errors)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={'error': _first_message(errors)},
        )


def _first_message(errors) -> str:
    if not errors:
        return 'Invalid request data'
    first = errors[0]
    field = '.'.join(str(part) for part in first.get('loc', ()) if part != 'body')
    message = first.get('msg', 'Invalid value')
    return f'{field}: {message}' if field else message
