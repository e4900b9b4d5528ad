from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire models: camelCase on the wire, snake_case in Python; either is accepted on input."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "from_attributes": True}
