"""
Shared schema base classes
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema with camelCase aliases, readable from ORM objects"""
    
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class StrictCamelModel(CamelModel):
    """Input schema that rejects unknown keys"""
    
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"


class Pagination(BaseModel):
    """Pagination block of list responses"""
    page: int
    limit: int
    total: int
    pages: int
