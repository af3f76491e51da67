"""Dashboard Queries — fetch an owner's invoices and reduce them with the pure core.

Invariants:
    - One repository read per call; all arithmetic happens in core/revenue_aggregation.py
    - Revenue series reads only paid invoices

Design Decisions:
    - Metrics read every invoice once and count in memory instead of issuing four
      COUNT/SUM queries: the four figures come from the same snapshot
"""

import logging

from invoicing.core.domain_types import AggregationPeriod, InvoiceStatus, OwnerId
from invoicing.core.repository_protocols import InvoiceRepository
from invoicing.core.revenue_aggregation import (
    DashboardMetrics, RevenueBucket,
    compute_dashboard_metrics, compute_revenue_series,
)

logger = logging.getLogger(__name__)


class DashboardQueries:
    """Read-only dashboard aggregations for one request."""

    def __init__(self, invoices: InvoiceRepository):
        self._invoices = invoices

    async def metrics(self, owner_id: OwnerId) -> DashboardMetrics:
        rows = await self._invoices.list_for_owner(owner_id)
        return compute_dashboard_metrics(rows)

    async def revenue_series(
        self, owner_id: OwnerId, period: AggregationPeriod,
    ) -> list[RevenueBucket]:
        rows = await self._invoices.list_for_owner(
            owner_id, statuses=[InvoiceStatus.PAID],
        )
        buckets = compute_revenue_series(rows, period)
        logger.debug(
            f"Revenue series: {len(buckets)} bucket(s) from {len(rows)} paid invoice(s)",
            extra={"owner_id": str(owner_id), "period": AggregationPeriod(period).value},
        )
        return buckets

    async def recent_invoices(self, owner_id: OwnerId, limit: int) -> list:
        return list(await self._invoices.recent_for_owner(owner_id, limit))
