from pydantic import BaseModel
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire (the mobile client's format)."""

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel
