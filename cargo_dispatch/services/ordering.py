"""
Dispatch ordering for a driver's cargos.

Each cargo carries an integer ``order`` that is only meaningful among cargos
assigned to the same driver. Reordering works on the driver's active subset
(dispatched or picked up) and rewrites that subset as a contiguous 1..N
sequence.
"""

from typing import Optional, Sequence, TypeVar

from pydantic import BaseModel

from cargo_dispatch.data.models.cargo import (
    ACTIVE_STATUSES,
    IN_PROGRESS_STATUSES,
    Cargo,
    CargoStatus,
)
from cargo_dispatch.data.models.driver import Driver

T = TypeVar("T")


class DriverCargoBoard(BaseModel):
    """A driver's cargos split the way the driver screen shows them."""

    driver_id: str
    active: list[Cargo]
    booked: list[Cargo]
    history: list[Cargo]


def sort_by_order(cargos: Sequence[Cargo]) -> list[Cargo]:
    """Stable sort on dispatch order."""
    return sorted(cargos, key=lambda cargo: cargo.order or 0)


def move_item(items: Sequence[T], old_index: int, new_index: int) -> list[T]:
    """
    Move one element to a new position, shifting the others.

    Args:
        items: Source sequence (not modified)
        old_index: Current index of the element
        new_index: Index the element ends up at

    Returns:
        New list with the element moved
    """
    moved = list(items)
    moved.insert(new_index, moved.pop(old_index))
    return moved


def resequence(cargos: Sequence[Cargo]) -> list[Cargo]:
    """Copies of the cargos numbered 1..N in list order."""
    return [cargo.model_copy(update={"order": index}) for index, cargo in enumerate(cargos, start=1)]


def driver_cargos(cargos: Sequence[Cargo], driver_id: str) -> list[Cargo]:
    """All cargos assigned to a driver, by dispatch order."""
    return sort_by_order([cargo for cargo in cargos if cargo.driver_id == driver_id])


def active_driver_cargos(cargos: Sequence[Cargo], driver_id: str) -> list[Cargo]:
    """The driver's reorderable cargos, by dispatch order."""
    return [cargo for cargo in driver_cargos(cargos, driver_id) if cargo.status in ACTIVE_STATUSES]


def reorder_active_cargos(
    cargos: Sequence[Cargo], driver_id: str, moved_id: str, target_id: str
) -> list[Cargo]:
    """
    Drag one active cargo onto another's position.

    Args:
        cargos: All known cargos
        driver_id: Driver whose active cargos are reordered
        moved_id: Document id of the dragged cargo
        target_id: Document id of the cargo it was dropped on

    Returns:
        The driver's whole active subset renumbered 1..N, or an empty list
        when nothing moves (same cargo, or either id outside the subset)
    """
    if moved_id == target_id:
        return []

    active = active_driver_cargos(cargos, driver_id)
    ids = [cargo.id for cargo in active]
    if moved_id not in ids or target_id not in ids:
        return []

    return resequence(move_item(active, ids.index(moved_id), ids.index(target_id)))


def partition_driver_cargos(cargos: Sequence[Cargo], driver_id: str) -> DriverCargoBoard:
    """Split a driver's cargos into active, booked and history lists."""
    own = driver_cargos(cargos, driver_id)
    return DriverCargoBoard(
        driver_id=driver_id,
        active=[cargo for cargo in own if cargo.status in ACTIVE_STATUSES],
        booked=[cargo for cargo in own if cargo.status == CargoStatus.BOOKED],
        history=[cargo for cargo in own if cargo.status not in IN_PROGRESS_STATUSES],
    )


def driver_last_location(
    driver_id: str, cargos: Sequence[Cargo], driver: Optional[Driver] = None
) -> str:
    """
    Where the driver will be after the current work.

    The delivery location of the last in-progress cargo by dispatch order;
    otherwise the driver's home city, or an empty string for an unknown driver.
    """
    in_progress = [
        cargo for cargo in driver_cargos(cargos, driver_id) if cargo.status in IN_PROGRESS_STATUSES
    ]
    if in_progress:
        return in_progress[-1].delivery_location
    return driver.home_city if driver else ""
