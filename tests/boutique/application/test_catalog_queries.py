"""Application tests for catalog pagination, lookup and grouping."""

import pytest
from boutique.product import queries
from protean.exceptions import ObjectNotFoundError


class TestListProducts:
    def test_defaults(self, make_product):
        for index in range(3):
            make_product(name=f"Shoe {index}")
        make_product(category="Bags", name="Tote")

        page = queries.list_products("Shoes")

        assert page.page == 1
        assert page.limit == 20
        assert page.total == 3
        assert page.total_pages == 1
        assert all(product.category == "Shoes" for product in page.items)

    def test_second_page(self, make_product):
        for index in range(5):
            make_product(category="Dresses", name=f"Dress {index}")

        page = queries.list_products("dresses", page="2", limit="2")

        assert len(page.items) == 2
        assert page.total == 5
        assert page.total_pages == 3

    def test_pages_follow_creation_order(self, make_product):
        for index in range(5):
            make_product(category="Bags", name=f"Bag {index}")

        pages = [queries.list_products("Bags", page=str(page), limit="2").items for page in (1, 2, 3)]

        assert [[product.name for product in items] for items in pages] == [
            ["Bag 0", "Bag 1"],
            ["Bag 2", "Bag 3"],
            ["Bag 4"],
        ]

    @pytest.mark.parametrize("page, limit", [("abc", "xyz"), ("0", "-5"), (None, None)])
    def test_bad_paging_falls_back_to_defaults(self, page, limit):
        result = queries.list_products("Bags", page=page, limit=limit)
        assert (result.page, result.limit) == (1, 20)

    def test_empty_category(self):
        page = queries.list_products("Bags")
        assert page.total == 0
        assert page.total_pages == 0


class TestGetProduct:
    def test_found(self, make_product):
        bag = make_product(category="Bags", name="Tote")
        assert queries.get_product("bags", bag.id).name == "Tote"

    def test_other_category_is_not_found(self, make_product):
        bag = make_product(category="Bags", name="Tote")
        with pytest.raises(ObjectNotFoundError):
            queries.get_product("Shoes", bag.id)


class TestGroupedByName:
    def test_groups_keep_insertion_order(self, make_product):
        first = make_product(name="Air", color="white")
        make_product(name="Runner")
        second = make_product(name="Air", color="black")

        grouped = queries.grouped_by_name("Shoes")

        assert list(grouped) == ["Air", "Runner"]
        assert [product.id for product in grouped["Air"]] == [first.id, second.id]
