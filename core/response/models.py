from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CustomBaseModel(BaseModel):
    """
    Base schema for request and response bodies.

    Fields are written in snake_case and exposed in camelCase, which is what
    the storefront sends and expects. Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class MessageResponse(CustomBaseModel):
    message: str = Field(...)


class ErrorResponse(CustomBaseModel):
    error: str = Field(...)
    error_code: str | None = Field(None)
