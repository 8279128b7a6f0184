"""Sales ledger queries: filtered logs and ledger/stock reconciliation."""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from boutique.ledger.sale_entry import SaleEntry
from boutique.product.product import Product
from boutique.utils.dates import DateRange


def sales_logs(start=None, end=None, product_id=None):
    """Ledger entries matching the filters, newest first."""
    date_range = DateRange.parse(start, end)
    entries = current_domain.repository_for(SaleEntry).entries(
        product_id=product_id,
        start=date_range.start,
        end=date_range.end,
    )
    return list(reversed(entries))


@dataclass(frozen=True)
class StockReconciliation:
    product_id: str
    category: str
    name: str | None
    stock: int
    ledger_stock: int

    @property
    def drift(self):
        return self.stock - self.ledger_stock

    @property
    def is_consistent(self):
        return self.drift == 0


def reconcile(products, entries):
    """Compare each product's stock with the stock implied by its ledger history.

    Ledger-implied stock is the sum of ``add`` quantities minus ``deduct``
    quantities for the product id. Entries for deleted products are ignored.
    """
    implied = {}
    for entry in entries:
        key = str(entry.product_id)
        implied[key] = implied.get(key, 0) + entry.signed_quantity

    return [
        StockReconciliation(
            product_id=str(product.id),
            category=product.category,
            name=product.name,
            stock=product.stock or 0,
            ledger_stock=implied.get(str(product.id), 0),
        )
        for product in products
    ]


def reconciliation_report():
    products = current_domain.repository_for(Product).all_products()
    entries = current_domain.repository_for(SaleEntry).entries()
    return reconcile(products, entries)
