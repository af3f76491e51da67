"""Dashboard Schemas — metrics and revenue chart responses.

Invariants:
    - chartData is in ascending period order (as produced by the core)
    - Revenue values are Decimal in Python and JSON numbers on the wire (Money)
"""

from pydantic import BaseModel, ConfigDict, Field

from invoicing.schemas.money import Money


class MetricsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_invoices: int = Field(alias="totalInvoices")
    paid_invoices: int = Field(alias="paidInvoices")
    pending_invoices: int = Field(alias="pendingInvoices")
    total_revenue: Money = Field(alias="totalRevenue")


class RevenuePoint(BaseModel):
    period: str
    revenue: Money


class RevenueChartResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    chart_data: list[RevenuePoint] = Field(alias="chartData")
