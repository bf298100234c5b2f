"""
Error handling utilities
"""

from typing import Optional
from pydantic import ValidationError as ModelValidationError
from task_engine.models.response import ErrorResponse
from task_engine.utils.logger import logger


class EngineError(Exception):
    """Base exception for engine errors"""
    pass


class ValidationError(EngineError):
    """Task record failed a create/edit validation rule"""
    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(self.message)


class InvalidTransitionError(EngineError):
    """Write attempted on a task in a terminal status"""
    def __init__(self, message: str, task_id: Optional[str] = None):
        self.message = message
        self.task_id = task_id
        super().__init__(self.message)


def handle_error(error: Exception) -> ErrorResponse:
    """
    Handle error and return user-friendly message

    Args:
        error: Exception to handle

    Returns:
        ErrorResponse with user-friendly message
    """
    logger.error(f"Error occurred: {error}", exc_info=True)

    if isinstance(error, InvalidTransitionError):
        return ErrorResponse(
            message=f"Task is locked: {error.message}",
            error_code="invalid_transition",
            details={"task_id": error.task_id} if error.task_id else None,
        )

    if isinstance(error, ValidationError):
        return ErrorResponse(
            message=f"Validation error: {error.message}",
            error_code="validation",
            details={"field": error.field} if error.field else None,
        )

    if isinstance(error, ModelValidationError):
        fields = [".".join(str(part) for part in item["loc"]) for item in error.errors()]
        return ErrorResponse(
            message="Malformed task record",
            error_code="malformed_record",
            details={"fields": fields},
        )

    # Generic error message
    return ErrorResponse(
        message="An unexpected error occurred.",
    )


def format_error_message(error: Exception) -> str:
    """
    Format error message for user

    Args:
        error: Exception to format

    Returns:
        User-friendly error message
    """
    error_response = handle_error(error)
    return error_response.message
