"""
User data model - an operator signed in through the identity provider.
"""

from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class User(BaseModel):
    """Operator account stored in the users collection."""

    id: str = Field(..., description="Identity provider uid")
    email: str
    name: str = ""
    is_admin: bool = False

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "User":
        """Build a user from a store document (which carries its ``id``)."""
        return cls.model_validate(document)

    def to_document(self) -> dict[str, Any]:
        """Document body without the id."""
        return self.model_dump(mode="json", by_alias=True, exclude={"id"})

    class Config:
        """Pydantic configuration."""

        alias_generator = to_camel
        populate_by_name = True
