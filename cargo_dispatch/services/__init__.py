"""
Domain services for the dispatch dashboard.

This module contains:
- Repositories: Driver, cargo and user collections
- Ordering: Per-driver dispatch sequence and driver boards
- Cargo list: Filtering, search and status sorting
- Accounting: Revenue and payment figures
- Auth: Operator sign-in over an external identity provider
"""

from .accounting import AccountingFilter, AccountingReport, AccountingService, FinancialStats
from .auth import AdminCredentials, AuthService, IdentityProvider, InMemoryIdentityProvider
from .base import BaseRepository
from .cargo_list import CargoListFilter, DashboardCounts, dashboard_counts, filter_cargos
from .cargos import CargoRepository
from .drivers import DriverRepository, search_drivers, visible_drivers
from .ordering import DriverCargoBoard, partition_driver_cargos, reorder_active_cargos
from .users import UserRepository

__all__ = [
    "AccountingFilter",
    "AccountingReport",
    "AccountingService",
    "FinancialStats",
    "AdminCredentials",
    "AuthService",
    "IdentityProvider",
    "InMemoryIdentityProvider",
    "BaseRepository",
    "CargoListFilter",
    "DashboardCounts",
    "dashboard_counts",
    "filter_cargos",
    "CargoRepository",
    "DriverRepository",
    "search_drivers",
    "visible_drivers",
    "DriverCargoBoard",
    "partition_driver_cargos",
    "reorder_active_cargos",
    "UserRepository",
]
