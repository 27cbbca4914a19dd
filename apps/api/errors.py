"""Exception handlers turning scheduling failures into {code, message, details?} responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from domain.enums import ErrorCode
from domain.errors import SchedulingError, status_for_code
from domain.models import ErrorPayload


logger = logging.getLogger(__name__)


def error_response(payload: ErrorPayload, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(payload.model_dump(exclude_none=True)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(SchedulingError)
    async def scheduling_error_handler(request: Request, exc: SchedulingError):
        status_code = status_for_code(exc.code.value)
        logger.warning(f"[{exc.code.value}] {exc.message} | Path={request.url.path}")
        return error_response(exc.to_payload(), status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"[ValidationError] Path={request.url.path} | {exc.errors()}")
        payload = ErrorPayload(
            code=ErrorCode.INVALID_INPUT.value,
            message="Invalid request payload",
            details=jsonable_encoder(exc.errors()),
        )
        return error_response(payload, status_for_code(payload.code))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(f"[UnhandledError] {exc} | Path={request.url.path}", exc_info=exc)
        payload = ErrorPayload(code=ErrorCode.INTERNAL_ERROR.value, message="Internal server error")
        return error_response(payload, 500)
