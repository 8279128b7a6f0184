"""Dashboard analytics — pure aggregation over products and ledger entries.

Every function here is a pure function of its arguments: it reads product
snapshots (``name``, ``category``, ``stock``, ``price``) and ledger entries
(``entry_type``, ``category``, ``name``, ``quantity``, ``total``, ``date``)
and returns plain data. Nothing is persisted or mutated, so results can be
recomputed at any time.

Orderings are deterministic: products are taken in the order given, entries
in chronological order, and every ranking uses a stable sort so ties keep
their encounter order.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum

from boutique.ledger.sale_entry import EntryType, as_utc
from boutique.utils.dates import last_days, shift_months, shift_years

LOW_STOCK_THRESHOLD = 5
LOW_STOCK_LIMIT = 5
TOP_SELLING_LIMIT = 5
TREND_DAYS = 7

_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True)
class Summary:
    total_products: int
    total_stock: int
    total_value: float
    total_sales: int
    total_revenue: float
    total_restocked: int


@dataclass(frozen=True)
class TrendPoint:
    date: str
    sales: int
    revenue: float


@dataclass(frozen=True)
class LowStockItem:
    name: str | None
    stock: int
    price: float
    category: str


@dataclass(frozen=True)
class TopSeller:
    name: str | None
    quantity: int
    revenue: float


@dataclass(frozen=True)
class StockStatus:
    in_stock: int
    low_stock: int
    out_of_stock: int


@dataclass(frozen=True)
class DashboardStats:
    summary: Summary
    sales_by_category: dict
    sales_trend: list
    low_stock_items: list
    top_selling: list
    stock_value_by_category: dict


@dataclass(frozen=True)
class InventoryStatus:
    total_products: int
    stock_status: StockStatus
    stock_value_by_category: dict


@dataclass
class SalesBucket:
    sales: int = 0
    revenue: float = 0.0


@dataclass(frozen=True)
class SalesAnalytics:
    period: str
    start_date: datetime
    end_date: datetime
    data: dict = field(default_factory=dict)


class Period(Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def parse(cls, value):
        """Unknown or missing periods fall back to ``month``."""
        for period in cls:
            if period.value == value:
                return period
        return cls.MONTH


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _deducts(entries):
    return [entry for entry in entries if entry.entry_type == EntryType.DEDUCT.value]


def _adds(entries):
    return [entry for entry in entries if entry.entry_type == EntryType.ADD.value]


def _stock(product):
    return product.stock or 0


def _value(product):
    return (product.price or 0.0) * _stock(product)


# ---------------------------------------------------------------------------
# Summaries
# ---------------------------------------------------------------------------
def summarize(products, entries):
    sales = _deducts(entries)
    return Summary(
        total_products=len(products),
        total_stock=sum(_stock(product) for product in products),
        total_value=sum(_value(product) for product in products),
        total_sales=sum(entry.quantity for entry in sales),
        total_revenue=sum(entry.total or 0.0 for entry in sales),
        total_restocked=sum(entry.quantity for entry in _adds(entries)),
    )


def sales_by_category(entries):
    totals = {}
    for entry in _deducts(entries):
        totals[entry.category] = totals.get(entry.category, 0) + entry.quantity
    return totals


def stock_value_by_category(products):
    totals = {}
    for product in products:
        totals[product.category] = totals.get(product.category, 0.0) + _value(product)
    return totals


def sales_trend(entries, today, days=TREND_DAYS):
    """One point per calendar day ending ``today``, oldest first; empty days report zero."""
    buckets = {day: SalesBucket() for day in last_days(today, days)}
    for entry in _deducts(entries):
        bucket = buckets.get(as_utc(entry.date).date())
        if bucket is not None:
            bucket.sales += entry.quantity
            bucket.revenue += entry.total or 0.0

    return [
        TrendPoint(date=day.isoformat(), sales=bucket.sales, revenue=bucket.revenue) for day, bucket in buckets.items()
    ]


def low_stock_items(products, threshold=LOW_STOCK_THRESHOLD, limit=LOW_STOCK_LIMIT):
    low = [product for product in products if _stock(product) <= threshold]
    low.sort(key=_stock)
    return [
        LowStockItem(name=product.name, stock=_stock(product), price=product.price or 0.0, category=product.category)
        for product in low[:limit]
    ]


def top_selling(entries, limit=TOP_SELLING_LIMIT):
    """Best sellers by units deducted; products sharing a name are merged."""
    quantities = {}
    revenues = {}
    for entry in _deducts(entries):
        quantities[entry.name] = quantities.get(entry.name, 0) + entry.quantity
        revenues[entry.name] = revenues.get(entry.name, 0.0) + (entry.total or 0.0)

    ranked = sorted(quantities.items(), key=lambda item: item[1], reverse=True)
    return [TopSeller(name=name, quantity=quantity, revenue=revenues[name]) for name, quantity in ranked[:limit]]


def stock_status(products, threshold=LOW_STOCK_THRESHOLD):
    return StockStatus(
        in_stock=sum(1 for product in products if _stock(product) > 0),
        low_stock=sum(1 for product in products if 0 < _stock(product) <= threshold),
        out_of_stock=sum(1 for product in products if _stock(product) == 0),
    )


def dashboard_stats(products, entries, today: date, threshold=LOW_STOCK_THRESHOLD) -> DashboardStats:
    return DashboardStats(
        summary=summarize(products, entries),
        sales_by_category=sales_by_category(entries),
        sales_trend=sales_trend(entries, today),
        low_stock_items=low_stock_items(products, threshold=threshold),
        top_selling=top_selling(entries),
        stock_value_by_category=stock_value_by_category(products),
    )


def inventory_status(products, threshold=LOW_STOCK_THRESHOLD) -> InventoryStatus:
    return InventoryStatus(
        total_products=len(products),
        stock_status=stock_status(products, threshold=threshold),
        stock_value_by_category=stock_value_by_category(products),
    )


# ---------------------------------------------------------------------------
# Period analytics
# ---------------------------------------------------------------------------
def period_start(period, now):
    if period == Period.WEEK:
        return now - timedelta(days=7)
    if period == Period.YEAR:
        return shift_years(now, -1)
    return shift_months(now, -1)


def bucket_key(period, moment):
    """Day for a week view, ``Week N`` of the month for a month view, month name for a year view."""
    if period == Period.WEEK:
        return moment.date().isoformat()
    if period == Period.MONTH:
        return f"Week {(moment.day + 6) // 7}"
    return _MONTH_ABBR[moment.month - 1]


def sales_analytics(entries, period, now) -> SalesAnalytics:
    period = Period.parse(period)
    start = period_start(period, now)

    data = {}
    for entry in _deducts(entries):
        moment = as_utc(entry.date)
        if moment < start:
            continue
        bucket = data.setdefault(bucket_key(period, moment), SalesBucket())
        bucket.sales += entry.quantity
        bucket.revenue += entry.total or 0.0

    return SalesAnalytics(period=period.value, start_date=start, end_date=now, data=data)
