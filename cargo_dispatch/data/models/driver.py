"""
Driver data model - the entity cargos are assigned to.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from cargo_dispatch.data.models.user import User

# Owner id marking a driver as visible to every user
PUBLIC_OWNER_ID = "all"


class Driver(BaseModel):
    """A stored driver record."""

    id: str = Field(..., description="Document id")
    name: str
    phone: str = ""
    home_city: str = Field("", description="Home base location")
    last_location: Optional[str] = None

    # Ownership scoping
    owner_id: str = Field(PUBLIC_OWNER_ID, description="Owning user id or 'all' for public")
    log_id: Optional[str] = Field(None, description="Driver's login id")

    def is_public(self, public_owner_id: str = PUBLIC_OWNER_ID) -> bool:
        """Whether every user may see this driver."""
        return self.owner_id == public_owner_id

    def is_visible_to(self, user: Optional[User], public_owner_id: str = PUBLIC_OWNER_ID) -> bool:
        """
        Check whether a user may see this driver.

        Admins see every driver; other users see public drivers and their own.
        Without a signed-in user only public drivers are visible.
        """
        if self.is_public(public_owner_id):
            return True
        if user is None:
            return False
        return user.is_admin or self.owner_id == user.id

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Driver":
        """Build a driver from a store document (which carries its ``id``)."""
        return cls.model_validate(document)

    def to_document(self) -> dict[str, Any]:
        """Document body without the id."""
        return self.model_dump(mode="json", by_alias=True, exclude={"id"}, exclude_none=True)

    class Config:
        """Pydantic configuration."""

        alias_generator = to_camel
        populate_by_name = True


class DriverDraft(BaseModel):
    """Add-driver form input. Name, phone and home location are required."""

    name: str
    phone: str
    home_city: str
    owner_id: str = PUBLIC_OWNER_ID
    log_id: Optional[str] = None

    @field_validator("name", "phone", "home_city", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("name")
    @classmethod
    def _name_required(cls, value: str) -> str:
        if not value:
            raise ValueError("Name is required")
        return value

    @field_validator("phone")
    @classmethod
    def _phone_required(cls, value: str) -> str:
        if not value:
            raise ValueError("Phone number is required")
        return value

    @field_validator("home_city")
    @classmethod
    def _home_required(cls, value: str) -> str:
        if not value:
            raise ValueError("Home location is required")
        return value

    def to_document(self) -> dict[str, Any]:
        """Document body for a new driver."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    class Config:
        """Pydantic configuration."""

        alias_generator = to_camel
        populate_by_name = True


class DriverUpdate(BaseModel):
    """Partial driver edit."""

    name: Optional[str] = None
    phone: Optional[str] = None
    home_city: Optional[str] = None
    last_location: Optional[str] = None
    owner_id: Optional[str] = None
    log_id: Optional[str] = None

    def to_changes(self) -> dict[str, Any]:
        """Changed fields in document form."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)

    def apply_to(self, driver: Driver) -> Driver:
        """Return a copy of ``driver`` with this update applied."""
        return driver.model_copy(update=self.model_dump(exclude_unset=True))

    class Config:
        """Pydantic configuration."""

        alias_generator = to_camel
        populate_by_name = True
