from http import HTTPStatus

from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    message: str


class HealthResponse(BaseModel):
    status: str
    version: str
    time: str


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the JSON error body ``{error, message}`` for a status code."""
    body = ErrorResponse(error=HTTPStatus(status_code).phrase, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())
