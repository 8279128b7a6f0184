"""Application tests for reading and appending to the sales ledger."""

from datetime import UTC, datetime

import pytest
from boutique.ledger.sale_entry import SaleEntry
from protean.exceptions import InvalidOperationError
from protean.utils.globals import current_domain


def _append(day, quantity, product_id="prod-1"):
    entry = SaleEntry(
        product_id=product_id,
        category="Shoes",
        name="Air",
        quantity=quantity,
        price=10.0,
        total=10.0 * quantity,
        entry_type="deduct",
        date=datetime(2024, 3, day, 12, tzinfo=UTC),
    )
    return current_domain.repository_for(SaleEntry).append(entry)


class TestEntries:
    def test_chronological_regardless_of_write_order(self):
        _append(9, 3)
        _append(1, 1)
        _append(5, 2)

        entries = current_domain.repository_for(SaleEntry).entries()

        assert [entry.quantity for entry in entries] == [1, 2, 3]

    def test_bounds_are_inclusive(self):
        for day in (1, 5, 9, 12):
            _append(day, day)

        entries = current_domain.repository_for(SaleEntry).entries(
            start=datetime(2024, 3, 5, 12, tzinfo=UTC),
            end=datetime(2024, 3, 9, 12, tzinfo=UTC),
        )

        assert [entry.quantity for entry in entries] == [5, 9]

    def test_open_ended_range_and_product_filter(self):
        _append(2, 1, product_id="prod-1")
        _append(6, 2, product_id="prod-2")
        _append(8, 3, product_id="prod-1")

        entries = current_domain.repository_for(SaleEntry).entries(
            product_id="prod-1", start=datetime(2024, 3, 4, tzinfo=UTC)
        )

        assert [entry.quantity for entry in entries] == [3]


def test_recorded_entries_cannot_be_appended_again():
    entry = _append(1, 1)
    stored = current_domain.repository_for(SaleEntry).get(entry.id)

    with pytest.raises(InvalidOperationError):
        current_domain.repository_for(SaleEntry).append(stored)
