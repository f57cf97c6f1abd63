from typing import Any, Dict, List
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError

from schoolhub.core.exceptions import BaseAPIError, StorageError
from schoolhub.core.logging import logger


def format_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic error entries into {path, message} pairs"""
    formatted = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        formatted.append({
            "path": ".".join(loc),
            "message": err.get("msg", "Invalid value")
        })
    return formatted


def get_error_message(error: BaseAPIError, include_details: bool = True) -> Dict[str, Any]:
    """
    Formats an application error into the JSON body returned to clients.

    Storage errors never expose their details.
    """
    body: Dict[str, Any] = {
        "error": error.error_code,
        "message": error.message,
    }
    if isinstance(error, StorageError):
        body["message"] = "Internal server error"
        return body
    if include_details and error.details:
        body["details"] = error.details
    return body


async def api_error_handler(request: Request, exc: BaseAPIError) -> JSONResponse:
    if isinstance(exc, StorageError):
        logger.error(
            f"Storage error on {request.method} {request.url.path}: {exc.message}",
            exc_info=exc,
            extra={'path': request.url.path}
        )
    elif exc.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN):
        logger.warning(f"Access denied on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=get_error_message(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "details": format_validation_errors(exc.errors())
        }
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": str(exc.detail)},
        headers=getattr(exc, "headers", None)
    )


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Unhandled database error on {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "STORAGE_ERROR", "message": "Internal server error"}
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAPIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
