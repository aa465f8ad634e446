from pydantic import BaseModel
from pydantic.alias_generators import to_camel

# Largest value an INTEGER column holds
MAX_INT = 2**31 - 1


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class SuccessResponse(CamelModel):
    success: bool = True
