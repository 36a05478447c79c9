"""
Accounting Service - Revenue and payment figures over cargos.

This service:
- Filters cargos by driver, delivery month and delivery date range
- Totals revenue over non-canceled cargos
- Splits delivered (unpaid) and paid amounts
- Lists the most recent paid or delivered cargos
"""

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

import structlog
from pydantic import BaseModel

from cargo_dispatch.core.config import ConfigManager, get_config
from cargo_dispatch.data.models.cargo import Cargo, CargoStatus

DEFAULT_RECENT_LIMIT = 5


class AccountingFilter(BaseModel):
    """Accounting screen filters; all optional and combined."""

    driver_id: Optional[str] = None
    month: Optional[date] = None  # any day within the month
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class FinancialStats(BaseModel):
    """Totals for the filtered cargos."""

    total_revenue: Decimal
    total_cargos: int
    unpaid_amount: Decimal
    unpaid_count: int
    paid_amount: Decimal
    paid_count: int


class AccountingReport(BaseModel):
    """Everything the accounting screen shows."""

    filter: AccountingFilter
    stats: FinancialStats
    recent_transactions: list[Cargo]


def _total(cargos: Sequence[Cargo]) -> Decimal:
    return sum((cargo.rate or Decimal("0") for cargo in cargos), Decimal("0"))


class AccountingService:
    """Aggregates accounting figures from the in-memory cargo collection."""

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        logger: Optional[structlog.BoundLogger] = None,
    ) -> None:
        """
        Initialize the accounting service.

        Args:
            config_manager: Optional config manager (defaults to global instance)
            logger: Optional structured logger
        """
        self.config_manager = config_manager or get_config()
        self.logger = logger or structlog.get_logger(service="accounting")
        self.recent_limit = int(
            self.config_manager.get_accounting_config().get(
                "recent_transactions_limit", DEFAULT_RECENT_LIMIT
            )
        )

    def filter_cargos(self, cargos: Sequence[Cargo], accounting_filter: AccountingFilter) -> list[Cargo]:
        """
        Apply the driver, month and date range filters.

        The month and range filters test the delivery date. The range applies
        only when both ends are set and includes both end days.
        """
        filtered = list(cargos)

        if accounting_filter.driver_id:
            filtered = [c for c in filtered if c.driver_id == accounting_filter.driver_id]

        if accounting_filter.month:
            month = accounting_filter.month
            filtered = [
                c
                for c in filtered
                if (c.delivery_datetime.year, c.delivery_datetime.month) == (month.year, month.month)
            ]

        if accounting_filter.start_date and accounting_filter.end_date:
            start, end = accounting_filter.start_date, accounting_filter.end_date
            filtered = [c for c in filtered if start <= c.delivery_datetime.date() <= end]

        return filtered

    def calculate_stats(self, cargos: Sequence[Cargo]) -> FinancialStats:
        """
        Calculate revenue totals.

        Revenue counts every cargo except canceled ones; delivered cargos are
        unpaid, paid cargos are paid.
        """
        billable = [c for c in cargos if c.status != CargoStatus.CANCELED]
        unpaid = [c for c in cargos if c.status == CargoStatus.DELIVERED]
        paid = [c for c in cargos if c.status == CargoStatus.PAID]

        return FinancialStats(
            total_revenue=_total(billable),
            total_cargos=len(billable),
            unpaid_amount=_total(unpaid),
            unpaid_count=len(unpaid),
            paid_amount=_total(paid),
            paid_count=len(paid),
        )

    def recent_transactions(self, cargos: Sequence[Cargo], limit: Optional[int] = None) -> list[Cargo]:
        """Paid or delivered cargos, latest delivery first."""
        settled = [c for c in cargos if c.status in (CargoStatus.PAID, CargoStatus.DELIVERED)]
        settled.sort(key=lambda c: c.delivery_datetime, reverse=True)
        return settled[: self.recent_limit if limit is None else limit]

    def build_report(
        self, cargos: Sequence[Cargo], accounting_filter: Optional[AccountingFilter] = None
    ) -> AccountingReport:
        """
        Build the accounting screen figures.

        Args:
            cargos: All known cargos
            accounting_filter: Filters to apply (none by default)

        Returns:
            AccountingReport with stats and recent transactions
        """
        accounting_filter = accounting_filter or AccountingFilter()
        filtered = self.filter_cargos(cargos, accounting_filter)
        stats = self.calculate_stats(filtered)

        self.logger.info(
            "accounting_report_built",
            cargos=len(filtered),
            total_revenue=str(stats.total_revenue),
            unpaid_amount=str(stats.unpaid_amount),
            paid_amount=str(stats.paid_amount),
        )

        return AccountingReport(
            filter=accounting_filter,
            stats=stats,
            recent_transactions=self.recent_transactions(filtered),
        )
