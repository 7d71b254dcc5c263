# /app/models/base_model.py

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """
    Base for every API contract. Attributes are snake_case in Python and
    camelCase on the wire; both spellings are accepted on input, and ORM
    objects can be validated directly.
    """
    model_config = ConfigDict(from_attributes=True, populate_by_name=True, alias_generator=to_camel)
