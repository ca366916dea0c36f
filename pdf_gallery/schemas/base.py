# pdf_gallery/schemas/base.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class BaseSchema(BaseModel):
    """Response schema read from ORM objects and serialized in camelCase."""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

class RequestSchema(BaseModel):
    """Request body accepting either camelCase or snake_case keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

class TimestampMixin(BaseSchema):
    created_at: datetime

class MessageResponse(BaseModel):
    message: str
