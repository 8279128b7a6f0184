"""Sales ledger access. Entries are appended, never updated or deleted."""

from protean.exceptions import InvalidOperationError

from boutique.domain import boutique
from boutique.ledger.sale_entry import SaleEntry
from boutique.utils.query import fetch_all


@boutique.repository(part_of=SaleEntry)
class SalesLedgerRepository:
    def append(self, entry):
        if entry.state_.is_persisted:
            raise InvalidOperationError("Ledger entries are immutable once recorded")
        self.add(entry)
        return entry

    def entries(self, product_id=None, start=None, end=None):
        """Ledger entries in chronological order, optionally narrowed by product and date range."""
        query = self._dao.query
        if product_id:
            query = query.filter(product_id=str(product_id))
        if start is not None:
            query = query.filter(date__gte=start)
        if end is not None:
            query = query.filter(date__lte=end)
        return fetch_all(query.order_by("date"))
