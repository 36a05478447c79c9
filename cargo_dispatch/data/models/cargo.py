"""
Cargo data model - represents a shipment tracked through the status lifecycle.
"""

import time
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


class CargoStatus(str, Enum):
    """Cargo status enumeration, in display order."""

    BOOKED = "booked"
    DISPATCHED = "dispatched"
    PICKED_UP = "pickedup"
    DELIVERED = "delivered"
    PAID = "paid"
    TONU = "TONU"
    CANCELED = "canceled"

    @property
    def label(self) -> str:
        """Human readable status name."""
        return STATUS_LABELS[self]


STATUS_LABELS: dict[CargoStatus, str] = {
    CargoStatus.BOOKED: "Booked",
    CargoStatus.DISPATCHED: "Dispatched",
    CargoStatus.PICKED_UP: "Picked Up",
    CargoStatus.DELIVERED: "Delivered",
    CargoStatus.PAID: "Paid",
    CargoStatus.TONU: "TONU",
    CargoStatus.CANCELED: "Canceled",
}

STATUS_DISPLAY_ORDER: list[CargoStatus] = list(CargoStatus)

# Reorderable subset of a driver's cargos
ACTIVE_STATUSES = frozenset({CargoStatus.DISPATCHED, CargoStatus.PICKED_UP})

# Cargos the driver still has to deliver
IN_PROGRESS_STATUSES = frozenset(
    {CargoStatus.BOOKED, CargoStatus.DISPATCHED, CargoStatus.PICKED_UP}
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _CargoDocument(BaseModel):
    """Shared document mapping for cargo models (camelCase wire names)."""

    @field_validator("order", mode="before", check_fields=False)
    @classmethod
    def _default_order(cls, value: Any) -> Any:
        return 0 if value in (None, "") else value

    @field_validator("rate", mode="before", check_fields=False)
    @classmethod
    def _default_rate(cls, value: Any) -> Any:
        return Decimal("0") if value in (None, "") else value

    @field_validator("notes", "driver_id", mode="before", check_fields=False)
    @classmethod
    def _empty_string(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("pickup_datetime", "delivery_datetime", check_fields=False)
    @classmethod
    def _aware_datetime(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Naive timestamps are treated as UTC so all cargos compare
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_serializer("rate", when_used="json", check_fields=False)
    def _serialize_rate(self, rate: Optional[Decimal]) -> Optional[float]:
        return None if rate is None else float(rate)

    class Config:
        """Pydantic configuration."""

        alias_generator = to_camel
        populate_by_name = True


class Cargo(_CargoDocument):
    """
    A stored cargo record.

    ``id`` is the document id assigned by the store; ``cargo_id`` is the
    identifier the operator typed in.
    """

    id: str = Field(..., description="Document id")
    cargo_id: str = Field("", description="User entered cargo id")

    # Locations and timing
    pickup_location: str = ""
    delivery_location: str = ""
    pickup_datetime: datetime = Field(default_factory=_utcnow, alias="pickupDateTime")
    delivery_datetime: datetime = Field(default_factory=_utcnow, alias="deliveryDateTime")

    notes: str = ""
    status: CargoStatus = CargoStatus.BOOKED

    # Dispatch
    driver_id: str = Field("", description="Assigned driver, empty when unassigned")
    order: int = Field(0, description="Dispatch sequence among the driver's cargos")

    rate: Decimal = Field(Decimal("0"), description="Rate (USD)")
    created_by: Optional[str] = None

    @property
    def is_active(self) -> bool:
        """Dispatched or picked up."""
        return self.status in ACTIVE_STATUSES

    @property
    def is_in_progress(self) -> bool:
        """Booked, dispatched or picked up."""
        return self.status in IN_PROGRESS_STATUSES

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Cargo":
        """Build a cargo from a store document (which carries its ``id``)."""
        return cls.model_validate(document)

    def to_document(self) -> dict[str, Any]:
        """Document body without the id."""
        return self.model_dump(mode="json", by_alias=True, exclude={"id"})


class CargoDraft(_CargoDocument):
    """Create-cargo form input with the form's defaults."""

    cargo_id: str = Field("", validate_default=True)
    pickup_location: str = ""
    delivery_location: str = ""
    pickup_datetime: datetime = Field(default_factory=_utcnow, alias="pickupDateTime")
    delivery_datetime: datetime = Field(default_factory=_utcnow, alias="deliveryDateTime")
    notes: str = ""
    status: CargoStatus = CargoStatus.BOOKED
    driver_id: str = ""
    order: int = 0
    rate: Decimal = Decimal("0")
    created_by: Optional[str] = None

    @field_validator("cargo_id", mode="before")
    @classmethod
    def _generated_cargo_id(cls, value: Any) -> Any:
        if value is None or not str(value).strip():
            return str(int(time.time() * 1000))
        return str(value).strip()

    def to_document(self) -> dict[str, Any]:
        """Document body for a new cargo."""
        return self.model_dump(mode="json", by_alias=True)


class CargoUpdate(_CargoDocument):
    """Partial cargo edit; only fields that were set are written."""

    cargo_id: Optional[str] = None
    pickup_location: Optional[str] = None
    delivery_location: Optional[str] = None
    pickup_datetime: Optional[datetime] = Field(None, alias="pickupDateTime")
    delivery_datetime: Optional[datetime] = Field(None, alias="deliveryDateTime")
    notes: Optional[str] = None
    status: Optional[CargoStatus] = None
    driver_id: Optional[str] = None
    order: Optional[int] = None
    rate: Optional[Decimal] = None

    @field_validator(
        "cargo_id",
        "pickup_location",
        "delivery_location",
        "pickup_datetime",
        "delivery_datetime",
        "status",
    )
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        # Omit a field to leave it unchanged; stored cargos never hold null here
        if value is None:
            raise ValueError("Field cannot be cleared")
        return value

    def to_changes(self) -> dict[str, Any]:
        """Changed fields in document form."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)

    def apply_to(self, cargo: Cargo) -> Cargo:
        """Return a copy of ``cargo`` with this update applied."""
        return cargo.model_copy(update=self.model_dump(exclude_unset=True))
