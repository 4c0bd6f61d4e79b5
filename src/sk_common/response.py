"""Unified operation result returned to UI consumers.

Session and wallet operations never raise at the UI boundary; they return:
{
    "success": true,
    "code": 0,           // 0=success, non-0=AppError code
    "message": "...",    // user-facing text
    "data": { ... },     // null on error
    "timestamp": "..."
}
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from src.sk_common.errors import AppError


class OperationResult(BaseModel):
    success: bool = True
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


def success_result(data: Any = None, message: str = "success") -> OperationResult:
    return OperationResult(success=True, code=0, message=message, data=data)


def error_result(code: int, message: str) -> OperationResult:
    return OperationResult(success=False, code=code, message=message, data=None)


def result_from_error(exc: AppError) -> OperationResult:
    return error_result(exc.code, exc.message)
