"""SaleEntry aggregate: one immutable record per stock-affecting event.

Entries denormalize the product's category, name and unit price at write
time, so later edits or deletion of the product never rewrite history.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, Identifier, Integer, String

from boutique.domain import boutique
from boutique.product.product import ProductCategory


class EntryType(Enum):
    ADD = "add"
    DEDUCT = "deduct"


def as_utc(value):
    """Treat naive datetimes (as returned by some SQL drivers) as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@boutique.aggregate
class SaleEntry:
    product_id = Identifier(required=True)
    category = String(required=True, choices=ProductCategory)
    name = String(max_length=255)
    quantity = Integer(required=True, min_value=0)
    price = Float(default=0.0)
    total = Float(default=0.0)
    entry_type = String(required=True, choices=EntryType)
    date = DateTime(required=True)

    @classmethod
    def record(cls, product, entry_type, quantity):
        """Build the entry describing ``quantity`` units added to or deducted from ``product``."""
        entry_type = EntryType(entry_type)
        price = product.price or 0.0
        return cls(
            product_id=str(product.id),
            category=product.category,
            name=product.name,
            quantity=quantity,
            price=price,
            total=price * quantity,
            entry_type=entry_type.value,
            date=datetime.now(UTC),
        )

    @property
    def is_deduct(self):
        return self.entry_type == EntryType.DEDUCT.value

    @property
    def is_add(self):
        return self.entry_type == EntryType.ADD.value

    @property
    def signed_quantity(self):
        return -self.quantity if self.is_deduct else self.quantity
