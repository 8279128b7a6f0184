"""Application tests for administrative update and delete."""

import pytest
from boutique.ledger.queries import reconciliation_report
from boutique.ledger.sale_entry import SaleEntry
from boutique.product.management import DeleteProduct, UpdateProduct
from boutique.product.product import Product
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain


class TestUpdateProduct:
    def test_overrides_fields_without_ledger_entry(self, make_product):
        bag = make_product(category="Bags", name="Tote", stock="3", price="20")

        current_domain.process(
            UpdateProduct(product_id=str(bag.id), category="Bags", name="Big Tote", stock=9, color="navy"),
            asynchronous=False,
        )

        updated = current_domain.repository_for(Product).get(bag.id)
        assert updated.name == "Big Tote"
        assert updated.stock == 9
        assert updated.color == "navy"
        assert updated.price == 20.0
        assert len(current_domain.repository_for(SaleEntry).entries()) == 1

    def test_override_is_visible_as_drift(self, make_product):
        bag = make_product(category="Bags", stock="3")
        current_domain.process(UpdateProduct(product_id=str(bag.id), category="Bags", stock=7), asynchronous=False)

        [row] = reconciliation_report()
        assert row.drift == 4

    def test_negative_stock_is_rejected(self, make_product):
        bag = make_product(category="Bags", stock="3")
        with pytest.raises(ValidationError):
            current_domain.process(UpdateProduct(product_id=str(bag.id), category="Bags", stock=-1), asynchronous=False)

        assert current_domain.repository_for(Product).get(bag.id).stock == 3

    def test_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(UpdateProduct(product_id="nope", category="Dresses", name="X"), asynchronous=False)


class TestDeleteProduct:
    def test_removes_product_and_keeps_history(self, make_product):
        dress = make_product(category="Dresses", name="Gala", stock="2")

        current_domain.process(DeleteProduct(product_id=str(dress.id), category="Dresses"), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Product).get(dress.id)
        [entry] = current_domain.repository_for(SaleEntry).entries()
        assert entry.name == "Gala"

    def test_delete_in_wrong_category(self, make_product):
        dress = make_product(category="Dresses")
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(DeleteProduct(product_id=str(dress.id), category="Shoes"), asynchronous=False)
