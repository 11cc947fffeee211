"""Domain errors raised by the services.

Routes never catch these; ``app.main`` renders them into the response
envelope with the matching HTTP status.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class CoreError(Exception):
    code = "CORE_ERROR"
    status_code = 400

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_error(self) -> Dict[str, Any]:
        error: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            error["details"] = self.details
        return error


class NotFoundError(CoreError):
    code = "NOT_FOUND"
    status_code = 404


class ValidationError(CoreError):
    code = "VALIDATION_ERROR"
    status_code = 422


class StoreFailure(CoreError):
    code = "STORE_FAILURE"
    status_code = 503
