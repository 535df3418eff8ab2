"""
Request body validation.

A ``RequestValidator`` wraps one pydantic schema and reduces its outcome to
either the parsed model or a single message describing the first violated
constraint. Instances are used as FastAPI dependencies; because FastAPI caches
a dependency per request, the same instance can appear in a route's
``dependencies`` list and in the handler signature without parsing twice.
"""
import logging
from typing import Any, Generic, Sequence, Type, TypeVar
from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError
from ..schemas.task import TaskCreate, TaskDelete, TaskStatusUpdate
from ..schemas.user import LoginRequest, RegisterRequest
from ..schemas.weather import WeatherRequest

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def first_error_message(errors: Sequence[Any]) -> str:
    """Human readable message for the first error in a pydantic error list."""
    if not errors:
        return "Invalid request"
    error = errors[0]
    field = ".".join(str(part) for part in error.get("loc", ()))
    message = error.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


class RequestValidator(Generic[SchemaT]):
    """Schema check for one request shape."""

    def __init__(self, schema: Type[SchemaT]):
        self.schema = schema

    def validate(self, payload: Any) -> SchemaT:
        """
        Check a decoded payload against the schema.

        Raises:
            ValidationError: with the first violation's message
        """
        if not isinstance(payload, dict):
            message = "Request body must be a JSON object"
            logger.warning(f"Validation failed: {message}")
            raise ValidationError(message)

        try:
            data = self.schema.model_validate(payload)
        except PydanticValidationError as e:
            message = first_error_message(e.errors())
            logger.warning(f"Validation failed: {message}")
            raise ValidationError(message) from e

        text = payload.get("text")
        if text:
            logger.info(f"Validation passed, text: {text}")
        return data

    async def __call__(self, request: Request) -> SchemaT:
        try:
            payload = await request.json()
        except ValueError:
            message = "Request body must be valid JSON"
            logger.warning(f"Validation failed: {message}")
            raise ValidationError(message)
        return self.validate(payload)

    def __repr__(self):
        return f"RequestValidator({self.schema.__name__})"


validate_register = RequestValidator(RegisterRequest)
validate_login = RequestValidator(LoginRequest)
validate_weather = RequestValidator(WeatherRequest)
validate_task = RequestValidator(TaskCreate)
validate_task_update = RequestValidator(TaskStatusUpdate)
validate_task_delete = RequestValidator(TaskDelete)
