"""
Pydantic data models for the dispatch dashboard.

Core models:
- Driver: Who cargos are assigned to, with a home base
- Cargo: Shipment details, status and dispatch order
- User: Signed-in operator
"""

from .cargo import (
    ACTIVE_STATUSES,
    IN_PROGRESS_STATUSES,
    STATUS_DISPLAY_ORDER,
    STATUS_LABELS,
    Cargo,
    CargoDraft,
    CargoStatus,
    CargoUpdate,
)
from .driver import PUBLIC_OWNER_ID, Driver, DriverDraft, DriverUpdate
from .user import User

__all__ = [
    "ACTIVE_STATUSES",
    "IN_PROGRESS_STATUSES",
    "STATUS_DISPLAY_ORDER",
    "STATUS_LABELS",
    "Cargo",
    "CargoDraft",
    "CargoStatus",
    "CargoUpdate",
    "PUBLIC_OWNER_ID",
    "Driver",
    "DriverDraft",
    "DriverUpdate",
    "User",
]
