# garage/schemas/common.py
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Request bodies use camelCase keys; attributes stay snake_case."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def partial(self) -> dict:
        """Only the fields the client actually sent, keyed by camelCase name."""
        return self.model_dump(exclude_unset=True, by_alias=True)
