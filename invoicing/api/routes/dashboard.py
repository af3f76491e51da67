"""Dashboard Routes — metrics, revenue chart, and recent invoices.

Invariants:
    - All figures computed from the caller's invoices only
    - period defaults to monthly; any other value than monthly/yearly is a 400
    - chartData is ascending by period
"""

import logging

from fastapi import APIRouter, Depends, Query

from invoicing.api.dependencies import get_current_owner, get_invoice_repository
from invoicing.config import get_settings
from invoicing.core.domain_types import AggregationPeriod, OwnerId
from invoicing.core.repository_protocols import InvoiceRepository
from invoicing.schemas.dashboard import (
    MetricsResponse, RevenueChartResponse, RevenuePoint,
)
from invoicing.schemas.invoice import InvoiceResponse, RecentInvoicesResponse
from invoicing.services.dashboard import DashboardQueries

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("/metrics", response_model=MetricsResponse)
async def dashboard_metrics(
    owner_id: OwnerId = Depends(get_current_owner),
    invoices: InvoiceRepository = Depends(get_invoice_repository),
):
    metrics = await DashboardQueries(invoices).metrics(owner_id)
    return MetricsResponse(
        total_invoices=metrics.total_invoices,
        paid_invoices=metrics.paid_invoices,
        pending_invoices=metrics.pending_invoices,
        total_revenue=metrics.total_revenue,
    )


@router.get("/revenue-chart", response_model=RevenueChartResponse)
async def revenue_chart(
    period: AggregationPeriod = Query(AggregationPeriod.MONTHLY),
    owner_id: OwnerId = Depends(get_current_owner),
    invoices: InvoiceRepository = Depends(get_invoice_repository),
):
    buckets = await DashboardQueries(invoices).revenue_series(owner_id, period)
    return RevenueChartResponse(
        chart_data=[
            RevenuePoint(period=b.period, revenue=b.revenue) for b in buckets
        ],
    )


@router.get("/recent-invoices", response_model=RecentInvoicesResponse)
async def recent_invoices(
    owner_id: OwnerId = Depends(get_current_owner),
    invoices: InvoiceRepository = Depends(get_invoice_repository),
):
    rows = await DashboardQueries(invoices).recent_invoices(
        owner_id, get_settings().recent_invoices_limit,
    )
    return RecentInvoicesResponse(
        invoices=[InvoiceResponse.model_validate(r) for r in rows],
    )
