"""Catalog store access for products."""

from protean.exceptions import ObjectNotFoundError

from boutique.domain import boutique
from boutique.exceptions import product_not_found
from boutique.product.product import Product, ProductCategory
from boutique.utils.query import fetch_all


@boutique.repository(part_of=Product)
class ProductRepository:
    """Products are stored together; each category is its own identity space."""

    def get_in_category(self, category, product_id):
        category = ProductCategory.parse(category)
        try:
            product = self.get(str(product_id))
        except ObjectNotFoundError:
            raise product_not_found(category.label) from None

        if product.category != category.value:
            raise product_not_found(category.label)
        return product

    def page_in_category(self, category, offset, limit):
        """One page of a category plus the category's total count."""
        category = ProductCategory.parse(category)
        query = self._dao.query.filter(category=category.value).order_by("created_at")
        result = query.offset(offset).limit(limit).all()
        return result.items, result.total

    def in_category(self, category):
        category = ProductCategory.parse(category)
        return fetch_all(self._dao.query.filter(category=category.value).order_by("created_at"))

    def all_products(self):
        """Every product, shoes first, then bags, then dresses."""
        products = []
        for category in ProductCategory:
            products.extend(self.in_category(category))
        return products

    def remove(self, product):
        self._dao.delete(product)
