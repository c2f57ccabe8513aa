"""Error taxonomy shared by services and the API layer.

Services report failures as ``ServiceError`` values inside ``Err`` results.
The API layer renders them as ``AppError`` with the status code mapped from
the error code. ``detail`` is for logs only and never leaves the process.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Failure kinds a request can end in."""

    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    UPSTREAM_ERROR = "upstream_error"
    CONFIGURATION_ERROR = "configuration_error"
    INTERNAL_ERROR = "internal_error"
    RATE_LIMITED = "rate_limited"


HTTP_STATUS_BY_CODE = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.TIMEOUT: 408,
    ErrorCode.UPSTREAM_ERROR: 500,
    ErrorCode.CONFIGURATION_ERROR: 500,
    ErrorCode.INTERNAL_ERROR: 500,
    ErrorCode.RATE_LIMITED: 429,
}


@dataclass(frozen=True)
class ServiceError:
    code: ErrorCode
    message: str
    detail: Optional[str] = None

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_CODE[self.code]

    @classmethod
    def validation(cls, message: str) -> "ServiceError":
        return cls(ErrorCode.VALIDATION_ERROR, message)

    @classmethod
    def not_found(cls, message: str, detail: Optional[str] = None) -> "ServiceError":
        return cls(ErrorCode.NOT_FOUND, message, detail)

    @classmethod
    def configuration(cls, message: str) -> "ServiceError":
        return cls(ErrorCode.CONFIGURATION_ERROR, message)

    @classmethod
    def internal(cls, message: str, detail: Optional[str] = None) -> "ServiceError":
        return cls(ErrorCode.INTERNAL_ERROR, message, detail)


class AppError(BaseModel):
    """User-facing error body."""

    code: ErrorCode = Field(..., description="Machine-readable error kind")
    message: str = Field(..., description="Short human-readable message")

    @classmethod
    def from_service_error(cls, error: ServiceError) -> "AppError":
        return cls(code=error.code, message=error.message)


class ErrorResponse(BaseModel):
    """Envelope for every failed request."""

    success: bool = False
    error: AppError
    retry_after: Optional[int] = Field(
        None, description="Seconds until the client may retry (rate limiting only)"
    )
