from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exposing snake_case attributes as camelCase JSON keys."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class RequestModel(CamelModel):
    """
    Base for request bodies and filters: no type coercion, no unknown keys.

    Only the camelCase names are accepted, so snake_case keys count as unknown.
    """

    class Config:
        populate_by_name = False
        strict = True
        extra = "forbid"
