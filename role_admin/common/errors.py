"""
Error Definitions

Defines the exceptions raised by the resource service. Each carries the
status code the enclosing request layer should answer with.
"""

from typing import Any, Optional


class AppError(Exception):
    """
    Application Base Exception

    Base class for all custom exceptions, containing error message, type, and code.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "app_error",
        code: str = "internal_error",
        details: Optional[dict[str, Any]] = None,
        status_code: int = 500,
    ):
        """
        Initialize exception

        Args:
            message: Error message
            error_type: Error type
            code: Error code
            details: Extra error details
            status_code: HTTP status code
        """
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.code = code
        self.details = details or {}
        self.status_code = status_code

    def to_dict(self, include_details: bool = True) -> dict[str, Any]:
        """
        Convert to dictionary format (for API response)

        Args:
            include_details: Whether to attach the details payload

        Returns:
            dict: Error information dictionary
        """
        result = {
            "error": {
                "message": self.message,
                "type": self.error_type,
                "code": self.code,
            }
        }
        if include_details and self.details:
            result["error"]["details"] = self.details
        return result


class NotFoundError(AppError):
    """
    Resource Not Found Error

    Raised when the targeted row does not exist.
    """

    def __init__(
        self,
        message: str = "No data found",
        code: str = "not_found",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="not_found_error",
            code=code,
            details=details,
            status_code=404,
        )


class ConflictError(AppError):
    """
    Resource Conflict Error

    Raised when a request contradicts the state it targets.
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        code: str = "conflict",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="conflict_error",
            code=code,
            details=details,
            status_code=409,
        )


class ValidationError(AppError):
    """
    Parameter Validation Error

    Raised when arguments (paging, sorting, filters, fields, patch documents)
    do not meet requirements.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        code: str = "validation_error",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="validation_error",
            code=code,
            details=details,
            status_code=422,
        )
