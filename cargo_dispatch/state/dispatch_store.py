"""
Dispatch Store - client state container for the dashboard.

Holds drivers, cargos, the signed-in user and the selected date filter.
Mutations call the persistence layer and then reconcile through collection
snapshots. Remote failures are logged and swallowed; the operation returns
``None`` or ``False`` instead of raising.
"""

import threading
from contextlib import contextmanager
from datetime import date, datetime, timezone
from typing import Any, Callable, Iterator, Optional, Union

import structlog

from cargo_dispatch.core.config import ConfigManager, get_config
from cargo_dispatch.core.exceptions import DuplicateCargoIdError
from cargo_dispatch.data.models.cargo import Cargo, CargoDraft, CargoStatus, CargoUpdate
from cargo_dispatch.data.models.driver import Driver, DriverDraft, DriverUpdate
from cargo_dispatch.data.models.user import User
from cargo_dispatch.persistence import DocumentStore, create_document_store
from cargo_dispatch.services.accounting import AccountingFilter, AccountingReport, AccountingService
from cargo_dispatch.services.cargo_list import (
    CargoListFilter,
    DashboardCounts,
    dashboard_counts,
    filter_cargos,
)
from cargo_dispatch.services.cargos import CargoRepository
from cargo_dispatch.services.drivers import DriverRepository, visible_drivers
from cargo_dispatch.services.ordering import (
    DriverCargoBoard,
    driver_cargos,
    driver_last_location,
    partition_driver_cargos,
    reorder_active_cargos,
)

StateListener = Callable[["DispatchStore"], None]


class DispatchStore:
    """
    Client state container.

    State:
    - drivers, cargos: latest collection snapshots
    - current_user: signed-in operator
    - selected_date: pickup-day filter for cargo tables (None shows every day)
    - is_loading: True while a remote call is in flight
    """

    def __init__(
        self,
        drivers: DriverRepository,
        cargos: CargoRepository,
        config_manager: Optional[ConfigManager] = None,
        logger: Optional[structlog.BoundLogger] = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            drivers: Driver repository
            cargos: Cargo repository
            config_manager: Optional config manager (defaults to global instance)
            logger: Optional structured logger
        """
        self.driver_repository = drivers
        self.cargo_repository = cargos
        self.config_manager = config_manager or get_config()
        self.logger = logger or structlog.get_logger(component="dispatch_store")
        self.accounting = AccountingService(config_manager=self.config_manager)

        self.drivers: list[Driver] = []
        self.cargos: list[Cargo] = []
        self.current_user: Optional[User] = None
        self.selected_date: Optional[date] = datetime.now(timezone.utc).date()
        self.is_loading = False

        # Snapshot callbacks may arrive on a listener thread
        self._lock = threading.RLock()
        self._listeners: list[StateListener] = []

    # ------------------------------------------------------------------
    # State plumbing
    # ------------------------------------------------------------------

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """
        Call ``listener(store)`` after every state change.

        Returns:
            Function that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, **changes: Any) -> None:
        with self._lock:
            for name, value in changes.items():
                setattr(self, name, value)
            listeners = list(self._listeners)
        self._notify_listeners(listeners)

    def _mutate(self, name: str, transform: Callable[[list[Any]], Optional[list[Any]]]) -> None:
        """
        Replace a collection with ``transform(current)`` atomically.

        A transform returning None leaves state untouched. Listeners run after
        the lock is released.
        """
        with self._lock:
            updated = transform(getattr(self, name))
            if updated is None:
                return
            setattr(self, name, updated)
            listeners = list(self._listeners)
        self._notify_listeners(listeners)

    def _notify_listeners(self, listeners: list[StateListener]) -> None:
        for listener in listeners:
            listener(self)

    @contextmanager
    def _loading(self) -> Iterator[None]:
        self._set_state(is_loading=True)
        try:
            yield
        finally:
            self._set_state(is_loading=False)

    def set_selected_date(self, selected: Optional[date]) -> None:
        """Set the pickup-day filter; None clears it."""
        self._set_state(selected_date=selected)

    def set_current_user(self, user: Optional[User]) -> None:
        """Set or clear the signed-in operator."""
        self._set_state(current_user=user)

    # ------------------------------------------------------------------
    # Loading and subscriptions
    # ------------------------------------------------------------------

    def fetch_drivers(self) -> None:
        """Load the drivers collection."""
        with self._loading():
            try:
                drivers = self.driver_repository.list_all()
                self._set_state(drivers=drivers)
                self.logger.info("drivers_fetched", count=len(drivers))
            except Exception as e:
                self.logger.error("driver_fetch_failed", error=str(e))

    def fetch_cargos(self) -> None:
        """Load the cargos collection."""
        with self._loading():
            try:
                cargos = self.cargo_repository.list_all()
                self._set_state(cargos=cargos)
                self.logger.info("cargos_fetched", count=len(cargos))
            except Exception as e:
                self.logger.error("cargo_fetch_failed", error=str(e))

    def initialize_subscriptions(self) -> Callable[[], None]:
        """
        Follow both collections through snapshot subscriptions.

        Returns:
            Cleanup function cancelling both subscriptions
        """
        self.logger.info("subscriptions_starting")
        try:
            unsubscribe_drivers = self.driver_repository.subscribe(self._on_drivers_snapshot)
            unsubscribe_cargos = self.cargo_repository.subscribe(self._on_cargos_snapshot)
        except Exception as e:
            self.logger.error("subscriptions_failed", error=str(e))
            raise

        def cleanup() -> None:
            self.logger.info("subscriptions_cleanup")
            unsubscribe_drivers()
            unsubscribe_cargos()

        return cleanup

    def _on_drivers_snapshot(self, drivers: list[Driver]) -> None:
        self.logger.debug("drivers_snapshot", count=len(drivers))
        self._set_state(drivers=drivers)

    def _on_cargos_snapshot(self, cargos: list[Cargo]) -> None:
        self.logger.debug("cargos_snapshot", count=len(cargos))
        self._set_state(cargos=cargos)

    # ------------------------------------------------------------------
    # Drivers
    # ------------------------------------------------------------------

    def add_driver(self, draft: DriverDraft) -> Optional[Driver]:
        """Create a driver; returns None if the store call failed."""
        with self._loading():
            try:
                driver = self.driver_repository.add(draft)
            except Exception as e:
                self.logger.error("driver_add_failed", error=str(e), name=draft.name)
                return None

        self._mutate(
            "drivers",
            lambda drivers: None if any(d.id == driver.id for d in drivers) else [*drivers, driver],
        )
        return driver

    def update_driver(self, driver_id: str, update: Union[DriverUpdate, dict[str, Any]]) -> bool:
        """Apply a partial driver edit; returns False if the store call failed."""
        if isinstance(update, dict):
            update = DriverUpdate(**update)

        with self._loading():
            try:
                self.driver_repository.update(driver_id, update)
            except Exception as e:
                self.logger.error("driver_update_failed", error=str(e), driver_id=driver_id)
                return False

        self._mutate(
            "drivers",
            lambda drivers: [update.apply_to(d) if d.id == driver_id else d for d in drivers],
        )
        return True

    def delete_driver(self, driver_id: str) -> bool:
        """Delete a driver; their cargos keep the dangling driver id."""
        with self._loading():
            try:
                self.driver_repository.delete(driver_id)
            except Exception as e:
                self.logger.error("driver_delete_failed", error=str(e), driver_id=driver_id)
                return False

        self._mutate("drivers", lambda drivers: [d for d in drivers if d.id != driver_id])
        return True

    def get_visible_drivers(self) -> list[Driver]:
        """Drivers the signed-in operator may see."""
        return visible_drivers(
            self.drivers, self.current_user, self.config_manager.get_public_owner_id()
        )

    def get_driver(self, driver_id: str) -> Optional[Driver]:
        """Look up a loaded driver by id."""
        return next((d for d in self.drivers if d.id == driver_id), None)

    def get_driver_last_location(self, driver_id: str) -> str:
        """Delivery location of the driver's last in-progress cargo, else home city."""
        return driver_last_location(driver_id, self.cargos, self.get_driver(driver_id))

    # ------------------------------------------------------------------
    # Cargos
    # ------------------------------------------------------------------

    def is_cargo_id_taken(self, cargo_id: str, exclude_id: Optional[str] = None) -> bool:
        """Advisory uniqueness check of a user-entered cargo id."""
        return any(c.cargo_id == cargo_id and c.id != exclude_id for c in self.cargos)

    def add_cargo(self, draft: CargoDraft) -> Optional[Cargo]:
        """
        Create a cargo stamped with the current user.

        Raises:
            DuplicateCargoIdError: If another loaded cargo uses the same cargo id

        Returns:
            The stored cargo, or None if the store call failed
        """
        if self.is_cargo_id_taken(draft.cargo_id):
            raise DuplicateCargoIdError(draft.cargo_id)

        if self.current_user is not None and not draft.created_by:
            draft = draft.model_copy(update={"created_by": self.current_user.id})

        with self._loading():
            try:
                cargo = self.cargo_repository.add(draft)
            except Exception as e:
                self.logger.error("cargo_add_failed", error=str(e), cargo_id=draft.cargo_id)
                return None

        self._mutate(
            "cargos",
            lambda cargos: None if any(c.id == cargo.id for c in cargos) else [*cargos, cargo],
        )
        return cargo

    def update_cargo(self, doc_id: str, update: Union[CargoUpdate, dict[str, Any]]) -> bool:
        """
        Apply a partial cargo edit.

        Any status may be set from any other.

        Raises:
            DuplicateCargoIdError: If the new cargo id is used by another loaded cargo

        Returns:
            False if the store call failed
        """
        if isinstance(update, dict):
            update = CargoUpdate(**update)

        if update.cargo_id is not None and self.is_cargo_id_taken(update.cargo_id, exclude_id=doc_id):
            raise DuplicateCargoIdError(update.cargo_id)

        with self._loading():
            try:
                self.cargo_repository.update(doc_id, update)
            except Exception as e:
                self.logger.error("cargo_update_failed", error=str(e), doc_id=doc_id)
                return False

        self._mutate(
            "cargos", lambda cargos: [update.apply_to(c) if c.id == doc_id else c for c in cargos]
        )
        return True

    def set_cargo_status(self, doc_id: str, status: CargoStatus) -> bool:
        """Move a cargo to another status."""
        return self.update_cargo(doc_id, CargoUpdate(status=status))

    def delete_cargo(self, doc_id: str) -> bool:
        """Delete a cargo; returns False if the store call failed."""
        with self._loading():
            try:
                self.cargo_repository.delete(doc_id)
            except Exception as e:
                self.logger.error("cargo_delete_failed", error=str(e), doc_id=doc_id)
                return False

        self._mutate("cargos", lambda cargos: [c for c in cargos if c.id != doc_id])
        return True

    def update_cargo_order(self, doc_id: str, order: int) -> bool:
        """Write one cargo's dispatch order; returns False if the store call failed."""
        with self._loading():
            try:
                self.cargo_repository.update_order(doc_id, order)
            except Exception as e:
                self.logger.error("cargo_order_update_failed", error=str(e), doc_id=doc_id, order=order)
                return False
        return True

    def reorder_driver_cargos(self, driver_id: str, moved_id: str, target_id: str) -> list[Cargo]:
        """
        Drop one of the driver's active cargos onto another's position.

        The renumbered orders are applied to local state first, then written
        with one independent update per cargo. A failed write is logged and
        the remaining writes still go out; the next snapshot reconciles.

        Returns:
            The driver's active cargos with their new orders (empty if nothing moved)
        """
        reordered: list[Cargo] = []

        def renumber(cargos: list[Cargo]) -> Optional[list[Cargo]]:
            reordered.extend(reorder_active_cargos(cargos, driver_id, moved_id, target_id))
            if not reordered:
                return None
            new_orders = {cargo.id: cargo.order for cargo in reordered}
            return [
                c.model_copy(update={"order": new_orders[c.id]}) if c.id in new_orders else c
                for c in cargos
            ]

        self._mutate("cargos", renumber)
        if not reordered:
            return []

        self.logger.info(
            "cargos_reordered", driver_id=driver_id, moved_id=moved_id, target_id=target_id
        )
        for cargo in reordered:
            self.update_cargo_order(cargo.id, cargo.order)
        return reordered

    def get_driver_cargos(self, driver_id: str) -> list[Cargo]:
        """All of a driver's cargos by dispatch order."""
        return driver_cargos(self.cargos, driver_id)

    def get_driver_board(self, driver_id: str) -> DriverCargoBoard:
        """A driver's active, booked and history cargos."""
        return partition_driver_cargos(self.cargos, driver_id)

    def list_cargos(
        self, status: Optional[CargoStatus] = None, search_term: str = ""
    ) -> list[Cargo]:
        """Cargo table for the selected date, optionally narrowed by status and search."""
        cargo_filter = CargoListFilter(
            selected_date=self.selected_date, status=status, search_term=search_term
        )
        return filter_cargos(self.cargos, self.drivers, cargo_filter)

    def dashboard_counts(self) -> DashboardCounts:
        """Navigation badge counters."""
        return dashboard_counts(self.cargos)

    def accounting_report(self, accounting_filter: Optional[AccountingFilter] = None) -> AccountingReport:
        """Accounting figures over the loaded cargos."""
        return self.accounting.build_report(self.cargos, accounting_filter)


def create_dispatch_store(
    config_manager: Optional[ConfigManager] = None,
    document_store: Optional[DocumentStore] = None,
) -> DispatchStore:
    """
    Build a store wired to the configured persistence backend.

    Args:
        config_manager: Optional config manager (defaults to global instance)
        document_store: Existing backend (created from configuration when omitted)

    Returns:
        DispatchStore with empty state; call fetch_* or initialize_subscriptions
    """
    config_manager = config_manager or get_config()
    document_store = document_store or create_document_store(config_manager)
    return DispatchStore(
        drivers=DriverRepository(document_store, config_manager=config_manager),
        cargos=CargoRepository(document_store, config_manager=config_manager),
        config_manager=config_manager,
    )
