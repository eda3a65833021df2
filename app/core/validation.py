from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.core.errors import BadRequestError, format_validation_errors

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def validate(payload: Mapping[str, Any], schema: Type[SchemaT]) -> SchemaT:
    """
    Validate a payload against a pydantic schema.

    Raises:
        BadRequestError: With one message per validation failure
    """
    try:
        return schema.model_validate(dict(payload))
    except ValidationError as e:
        raise BadRequestError(format_validation_errors(e.errors()))
