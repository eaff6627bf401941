from pydantic import BaseModel, PlainSerializer
from pydantic.alias_generators import to_camel
from typing import Annotated, Generic, Optional, TypeVar
from decimal import Decimal

T = TypeVar("T")

# Decimal in Python, a JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

class CamelModel(BaseModel):
    """Base for wire models: snake_case in Python, camelCase in JSON"""
    
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

# Uniform response envelope
class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    count: Optional[int] = None
    data: Optional[T] = None
    message: Optional[str] = None
