"""
Cargo list queries - filtering, search and status sorting for cargo tables.
"""

from datetime import date
from typing import Optional, Sequence

from pydantic import BaseModel

from cargo_dispatch.data.models.cargo import (
    ACTIVE_STATUSES,
    STATUS_DISPLAY_ORDER,
    Cargo,
    CargoStatus,
)
from cargo_dispatch.data.models.driver import Driver

UNASSIGNED_DRIVER_NAME = "Not Assigned"


class CargoListFilter(BaseModel):
    """
    Filters applied to a cargo table.

    The date filter matches the calendar day of pickup; ``None`` disables it.
    Screens listing a precomputed set (unpaid, accounting) switch the date and
    status filters off entirely.
    """

    selected_date: Optional[date] = None
    status: Optional[CargoStatus] = None
    search_term: str = ""
    apply_date_filter: bool = True
    apply_status_filter: bool = True


class DashboardCounts(BaseModel):
    """Badge counters shown in navigation."""

    active: int
    booked: int
    unpaid_delivered: int


def driver_name(drivers: Sequence[Driver], driver_id: str) -> str:
    """Name of the assigned driver, or "Not Assigned"."""
    for driver in drivers:
        if driver.id == driver_id:
            return driver.name
    return UNASSIGNED_DRIVER_NAME


def matches_search(cargo: Cargo, drivers: Sequence[Driver], search_term: str) -> bool:
    """Case-insensitive match on ids, locations, notes and driver name."""
    needle = search_term.lower()
    if not needle:
        return True
    haystack = (
        cargo.id,
        cargo.cargo_id,
        cargo.pickup_location,
        cargo.delivery_location,
        cargo.notes or "",
        driver_name(drivers, cargo.driver_id),
    )
    return any(needle in value.lower() for value in haystack)


def sort_by_status(cargos: Sequence[Cargo]) -> list[Cargo]:
    """Stable sort following the status display order."""
    return sorted(cargos, key=lambda cargo: STATUS_DISPLAY_ORDER.index(cargo.status))


def filter_cargos(
    cargos: Sequence[Cargo], drivers: Sequence[Driver], cargo_filter: CargoListFilter
) -> list[Cargo]:
    """
    Apply a cargo table's filters and sort the result by status.

    Args:
        cargos: Cargos to list
        drivers: Known drivers (for searching by driver name)
        cargo_filter: Active filters

    Returns:
        Matching cargos in status display order
    """
    result = []
    for cargo in cargos:
        if (
            cargo_filter.apply_date_filter
            and cargo_filter.selected_date is not None
            and cargo.pickup_datetime.date() != cargo_filter.selected_date
        ):
            continue
        if (
            cargo_filter.apply_status_filter
            and cargo_filter.status is not None
            and cargo.status != cargo_filter.status
        ):
            continue
        if not matches_search(cargo, drivers, cargo_filter.search_term):
            continue
        result.append(cargo)
    return sort_by_status(result)


def unpaid_delivered_cargos(cargos: Sequence[Cargo]) -> list[Cargo]:
    """Delivered cargos that have not been marked paid."""
    return [cargo for cargo in cargos if cargo.status == CargoStatus.DELIVERED]


def dashboard_counts(cargos: Sequence[Cargo]) -> DashboardCounts:
    """Count active, booked and unpaid delivered cargos."""
    return DashboardCounts(
        active=sum(1 for cargo in cargos if cargo.status in ACTIVE_STATUSES),
        booked=sum(1 for cargo in cargos if cargo.status == CargoStatus.BOOKED),
        unpaid_delivered=len(unpaid_delivered_cargos(cargos)),
    )
