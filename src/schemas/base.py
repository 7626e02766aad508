"""Shared pydantic configuration for request and response schemas."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema exposing camelCase JSON while keeping snake_case attributes.

    Incoming payloads are accepted in either form (`category_id` or `categoryId`).
    Responses are serialized by alias, which FastAPI does by default.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(CamelModel):
    """Acknowledgement for operations with no record to return."""

    success: bool = True
