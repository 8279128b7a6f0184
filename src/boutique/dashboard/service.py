"""Dashboard read service — loads a catalog and ledger snapshot and aggregates it."""

from datetime import UTC, datetime

from protean.utils.globals import current_domain

from boutique.dashboard import analytics
from boutique.ledger.sale_entry import SaleEntry
from boutique.product.product import Product
from boutique.utils.dates import DateRange


def low_stock_threshold():
    custom = current_domain.config.get("custom") or {}
    return int(custom.get("LOW_STOCK_THRESHOLD", analytics.LOW_STOCK_THRESHOLD))


def load_snapshot(date_range=None):
    """All products plus the ledger entries inside ``date_range`` (chronological)."""
    date_range = date_range or DateRange()
    products = current_domain.repository_for(Product).all_products()
    entries = current_domain.repository_for(SaleEntry).entries(start=date_range.start, end=date_range.end)
    return products, entries


def dashboard_stats(start_date=None, end_date=None, now=None):
    now = now or datetime.now(UTC)
    products, entries = load_snapshot(DateRange.parse(start_date, end_date))
    return analytics.dashboard_stats(products, entries, today=now.date(), threshold=low_stock_threshold())


def inventory_status():
    products = current_domain.repository_for(Product).all_products()
    return analytics.inventory_status(products, threshold=low_stock_threshold())


def sales_analytics(period=None, now=None):
    now = now or datetime.now(UTC)
    start = analytics.period_start(analytics.Period.parse(period), now)
    entries = current_domain.repository_for(SaleEntry).entries(start=start)
    return analytics.sales_analytics(entries, period, now)
