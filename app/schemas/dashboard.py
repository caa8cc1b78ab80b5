from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class DashboardModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class InventoryTotals(DashboardModel):
    total_stock: int = Field(alias="totalStock")
    inventory_value: float = Field(alias="inventoryValue")
    capital_invested: float = Field(alias="capitalInvested")
    out_of_stock_count: int = Field(alias="outOfStockCount")
    low_stock_count: int = Field(alias="lowStockCount")


class ChartSegment(DashboardModel):
    label: str
    value: float
    color: str


class ValueRank(DashboardModel):
    id: Optional[int] = None
    name: str
    brand: str
    category: str
    stock: int
    value: float


class ProfitRank(DashboardModel):
    id: Optional[int] = None
    name: str
    brand: str
    profit_per_unit: float = Field(alias="profitPerUnit")


class ProductRevenue(DashboardModel):
    name: str
    revenue: float
    units: int


class SalesSummary(DashboardModel):
    total_revenue: float = Field(alias="totalRevenue")
    total_units: int = Field(alias="totalUnits")
    revenue_by_product: List[ProductRevenue] = Field(alias="revenueByProduct")


class MonthlyProjection(DashboardModel):
    month: str
    sales: int
    expense: int
    profit: int


class TrendProjection(DashboardModel):
    """Projected monthly figures derived from current stock, not from recorded sales."""
    estimated: bool = True
    estimated_sales: float = Field(alias="estimatedSales")
    months: List[MonthlyProjection]
    total_expense: int = Field(alias="totalExpense")
    total_profit: int = Field(alias="totalProfit")
    profit_margin: int = Field(alias="profitMargin")
    sales_growth: int = Field(alias="salesGrowth")


class TrendPaths(DashboardModel):
    profit: str
    expense: str


class CategoryGroup(DashboardModel):
    category: str
    total_stock: int = Field(alias="totalStock")
    items: List[Dict[str, Any]]


class StockMovement(DashboardModel):
    id: Optional[int] = None
    name: str
    brand: str
    category: str
    stock: int
    min_stock_alert: int = Field(alias="minStockAlert")
    status: str
    action: str


class CategorySales(DashboardModel):
    label: str
    value: float


class DashboardSummary(DashboardModel):
    totals: InventoryTotals
    category_segments: List[ChartSegment] = Field(alias="categorySegments")
    category_gradient: str = Field(alias="categoryGradient")
    top_by_value: List[ValueRank] = Field(alias="topByValue")
    profit_ranking: List[ProfitRank] = Field(alias="profitRanking")
    trend: TrendProjection
    trend_paths: TrendPaths = Field(alias="trendPaths")
    stock_movements: List[StockMovement] = Field(alias="stockMovements")
    items_by_category: List[CategoryGroup] = Field(alias="itemsByCategory")
    sales_by_category: List[CategorySales] = Field(alias="salesByCategory")
