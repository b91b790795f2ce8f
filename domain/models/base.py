"""
Shared pydantic base for domain models.

The web client speaks camelCase (``daysPerWeek``, ``exerciseTemplate``) while
storage rows and Python code use snake_case. Models accept either on input and
serialize by alias on the wire.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """BaseModel with camelCase aliases and snake_case population."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
