"""
Dashboard analytics computed from the current item list and the session
sales log.

Every function is pure and recomputes from scratch; callers rerun them
whenever the item list changes. Items are the JSON objects returned by the
items API (camelCase keys), so accessors tolerate missing fields.

The monthly trend is a projection from current stock levels, not a record of
past sales, and is marked `estimated`.
"""
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from app.schemas.dashboard import (
    CategoryGroup,
    CategorySales,
    ChartSegment,
    DashboardSummary,
    InventoryTotals,
    MonthlyProjection,
    ProductRevenue,
    ProfitRank,
    SalesSummary,
    StockMovement,
    TrendPaths,
    TrendProjection,
    ValueRank,
)
from app.schemas.sales import SaleRecord
from app.utilities.charts import build_chart_gradient, build_line_path
from app.utilities.utility import round_half_up, to_number

ItemData = Mapping[str, Any]

CHART_PALETTE = ["#561C24", "#6D2932", "#8B3A44", "#a05060", "#C7B7A3", "#3a1a20"]
MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun"]
CATEGORY_OPTIONS = ["Pods", "Battery", "E-Liquid", "Disposable", "Coils", "Accessories", "Other"]
UNCATEGORIZED = "Uncategorized"

TOP_VALUE_LIMIT = 6
PROFIT_RANK_LIMIT = 8
REVENUE_RANK_LIMIT = 7

ESTIMATED_SELL_THROUGH = 0.28
CATEGORY_SELL_THROUGH = 0.3
OVERSTOCK_LEVEL = 40
DEFAULT_MIN_STOCK_ALERT = 10

TREND_WIDTH = 640
TREND_HEIGHT = 220
TREND_PADDING = 22
TREND_SCALE = 1000


def stock_of(item: ItemData) -> int:
    return int(to_number(item.get("stock")))


def raw_price_of(item: ItemData) -> float:
    return to_number(item.get("rawPrice"))


def selling_price_of(item: ItemData) -> float:
    if item.get("sellingPrice") is not None:
        return to_number(item.get("sellingPrice"))
    return to_number(item.get("price"))


def profit_per_unit_of(item: ItemData) -> float:
    if item.get("profit") is not None:
        return to_number(item.get("profit"))
    return selling_price_of(item) - raw_price_of(item)


def min_stock_alert_of(item: ItemData) -> int:
    return int(to_number(item.get("minStockAlert"), DEFAULT_MIN_STOCK_ALERT))


def category_of(item: ItemData) -> str:
    return item.get("category") or UNCATEGORIZED


def inventory_totals(items: Sequence[ItemData]) -> InventoryTotals:
    return InventoryTotals(
        total_stock=sum(stock_of(item) for item in items),
        inventory_value=sum(stock_of(item) * selling_price_of(item) for item in items),
        capital_invested=sum(raw_price_of(item) * stock_of(item) for item in items),
        out_of_stock_count=sum(1 for item in items if stock_of(item) == 0),
        low_stock_count=sum(
            1 for item in items if 0 < stock_of(item) <= min_stock_alert_of(item)
        ),
    )


def _ranked_totals(totals: Dict[str, float]) -> List[tuple]:
    # Stable: ties keep first-seen order
    return sorted(totals.items(), key=lambda entry: entry[1], reverse=True)


def category_segments(items: Sequence[ItemData]) -> List[ChartSegment]:
    """Stock per category, largest first, coloured by rank from the palette."""
    grouped: Dict[str, float] = {}
    for item in items:
        category = category_of(item)
        grouped[category] = grouped.get(category, 0) + stock_of(item)

    return [
        ChartSegment(label=label, value=value, color=CHART_PALETTE[index % len(CHART_PALETTE)])
        for index, (label, value) in enumerate(_ranked_totals(grouped))
    ]


def top_products_by_value(items: Sequence[ItemData], limit: int = TOP_VALUE_LIMIT) -> List[ValueRank]:
    ranked = [
        ValueRank(
            id=item.get("id"),
            name=item.get("name", ""),
            brand=item.get("brand", ""),
            category=item.get("category", ""),
            stock=stock_of(item),
            value=stock_of(item) * selling_price_of(item),
        )
        for item in items
    ]
    return sorted(ranked, key=lambda entry: entry.value, reverse=True)[:limit]


def profit_per_product(items: Sequence[ItemData], limit: int = PROFIT_RANK_LIMIT) -> List[ProfitRank]:
    ranked = [
        ProfitRank(
            id=item.get("id"),
            name=item.get("name", ""),
            brand=item.get("brand", ""),
            profit_per_unit=profit_per_unit_of(item),
        )
        for item in items
    ]
    return sorted(ranked, key=lambda entry: entry.profit_per_unit, reverse=True)[:limit]


def sales_summary(sales: Iterable[SaleRecord], limit: int = REVENUE_RANK_LIMIT) -> SalesSummary:
    sales = list(sales)
    grouped: Dict[str, ProductRevenue] = {}
    for sale in sales:
        entry = grouped.setdefault(sale.name, ProductRevenue(name=sale.name, revenue=0, units=0))
        entry.revenue += sale.total_amount
        entry.units += sale.quantity

    return SalesSummary(
        total_revenue=sum(sale.total_amount for sale in sales),
        total_units=sum(sale.quantity for sale in sales),
        revenue_by_product=sorted(
            grouped.values(), key=lambda entry: entry.revenue, reverse=True
        )[:limit],
    )


def estimated_sales(items: Sequence[ItemData]) -> float:
    return sum(
        selling_price_of(item) * max(0, round_half_up(stock_of(item) * ESTIMATED_SELL_THROUGH))
        for item in items
    )


def monthly_trend(items: Sequence[ItemData]) -> TrendProjection:
    """
    Spread the estimated sales across six months with a fixed growth curve,
    then derive expense and profit per month. This is a presentation
    heuristic, not accounting data.
    """
    estimated = estimated_sales(items)

    months = []
    for index, month in enumerate(MONTH_LABELS):
        sales = round_half_up((estimated / 6) * (0.72 + index * 0.1))
        ratio = 0.56 + (0.05 if index % 2 == 0 else 0.02)
        expense = round_half_up(sales * ratio)
        months.append(
            MonthlyProjection(month=month, sales=sales, expense=expense, profit=max(0, sales - expense))
        )

    total_expense = sum(entry.expense for entry in months)
    total_profit = sum(entry.profit for entry in months)
    profit_margin = round_half_up((total_profit / estimated) * 100) if estimated else 0

    first = months[0].sales
    last = months[-1].sales
    sales_growth = round_half_up(((last - first) / first) * 100) if first else 0

    return TrendProjection(
        estimated_sales=estimated,
        months=months,
        total_expense=total_expense,
        total_profit=total_profit,
        profit_margin=profit_margin,
        sales_growth=sales_growth,
    )


def trend_paths(trend: TrendProjection) -> TrendPaths:
    """SVG paths for the profit and expense lines, scaled against the largest trend value."""
    trend_max = max(
        [entry.sales for entry in trend.months]
        + [entry.expense for entry in trend.months]
        + [entry.profit for entry in trend.months]
        + [1]
    )

    def scale(values):
        return [max(1, round_half_up((value / trend_max) * TREND_SCALE)) for value in values]

    profit = scale(entry.profit for entry in trend.months)
    expense = scale(entry.expense for entry in trend.months)
    return TrendPaths(
        profit=build_line_path(profit, TREND_WIDTH, TREND_HEIGHT, TREND_PADDING),
        expense=build_line_path(expense, TREND_WIDTH, TREND_HEIGHT, TREND_PADDING),
    )


def items_by_category(items: Sequence[ItemData]) -> List[CategoryGroup]:
    grouped: Dict[str, List[ItemData]] = defaultdict(list)
    for item in items:
        grouped[category_of(item)].append(item)

    return [
        CategoryGroup(
            category=category,
            total_stock=sum(stock_of(item) for item in category_items),
            items=[
                dict(item)
                for item in sorted(
                    category_items, key=lambda entry: (entry.get("brand", ""), entry.get("name", ""))
                )
            ],
        )
        for category, category_items in sorted(grouped.items())
    ]


def stock_status(stock: int, min_stock_alert: int) -> str:
    if stock == 0:
        return "Out of Stock"
    if stock <= min_stock_alert:
        return "Low Stock"
    if stock >= OVERSTOCK_LEVEL:
        return "Overstock"
    return "Healthy"


STOCK_ACTIONS = {
    "Out of Stock": "Urgent restock",
    "Low Stock": "Prepare reorder",
    "Overstock": "Run promo bundle",
    "Healthy": "Maintain level",
}


def stock_movements(items: Sequence[ItemData]) -> List[StockMovement]:
    movements = []
    for item in items:
        stock = stock_of(item)
        min_stock_alert = min_stock_alert_of(item)
        status = stock_status(stock, min_stock_alert)
        movements.append(
            StockMovement(
                id=item.get("id"),
                name=item.get("name", ""),
                brand=item.get("brand", ""),
                category=item.get("category", ""),
                stock=stock,
                min_stock_alert=min_stock_alert,
                status=status,
                action=STOCK_ACTIONS[status],
            )
        )
    return sorted(movements, key=lambda entry: entry.stock)


def sales_by_category(items: Sequence[ItemData]) -> List[CategorySales]:
    grouped: Dict[str, float] = {}
    for item in items:
        category = category_of(item)
        projected = selling_price_of(item) * max(1, round_half_up(stock_of(item) * CATEGORY_SELL_THROUGH))
        grouped[category] = grouped.get(category, 0) + projected

    return [CategorySales(label=label, value=value) for label, value in _ranked_totals(grouped)]


def build_dashboard(items: Sequence[ItemData]) -> DashboardSummary:
    """Every inventory-derived view in one snapshot."""
    segments = category_segments(items)
    trend = monthly_trend(items)
    return DashboardSummary(
        totals=inventory_totals(items),
        category_segments=segments,
        category_gradient=build_chart_gradient(segments),
        top_by_value=top_products_by_value(items),
        profit_ranking=profit_per_product(items),
        trend=trend,
        trend_paths=trend_paths(trend),
        stock_movements=stock_movements(items),
        items_by_category=items_by_category(items),
        sales_by_category=sales_by_category(items),
    )
