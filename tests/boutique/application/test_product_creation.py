"""Application tests for product creation command handler."""

import pytest
from boutique.ledger.sale_entry import SaleEntry
from boutique.product.creation import CreateProduct
from boutique.product.product import Product
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain


def _ledger():
    return current_domain.repository_for(SaleEntry).entries()


class TestCreateProductHandler:
    def test_create_shoe_records_opening_stock(self):
        product_id = current_domain.process(
            CreateProduct(category="Shoes", name="Air", price="100", stock="10"),
            asynchronous=False,
        )

        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "Air"
        assert product.stock == 10

        [entry] = _ledger()
        assert entry.entry_type == "add"
        assert entry.product_id == product_id
        assert entry.quantity == 10
        assert entry.total == 1000.0

    def test_create_bag_with_size(self, make_product):
        bag = make_product(category="Bags", name="Tote", size="L")
        assert bag.category == "Bags"
        assert bag.size == "L"

    def test_create_with_zero_stock_still_records_an_entry(self, make_product):
        dress = make_product(category="Dresses", name="Gala", stock="0", price="80")

        [entry] = _ledger()
        assert entry.product_id == str(dress.id)
        assert entry.quantity == 0
        assert entry.total == 0.0

    def test_unparseable_numbers_become_zero(self, make_product):
        bag = make_product(category="Bags", stock="lots", price="cheap")
        assert bag.stock == 0
        assert bag.price == 0.0

    def test_long_unparseable_numbers_become_zero(self, make_product):
        dress = make_product(category="Dresses", stock="x" * 200, price="about " * 40)
        assert dress.stock == 0
        assert dress.price == 0.0

    def test_shoe_sizes_from_json(self, make_product):
        shoe = make_product(sizes='{"US": "10", "CM": "28"}')
        assert shoe.sizes.to_mapping() == {"US": "10", "CM": "28"}

    def test_invalid_payload_writes_nothing(self):
        with pytest.raises(ValidationError):
            current_domain.process(
                CreateProduct(category="Shoes", name="Air", gender="robot"),
                asynchronous=False,
            )

        assert current_domain.repository_for(Product).all_products() == []
        assert _ledger() == []
