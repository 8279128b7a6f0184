"""Catalog queries: pagination, lookup by id and the grouped-by-name view.

Read-only; nothing here mutates the catalog.
"""

import math
from dataclasses import dataclass

from protean.utils.globals import current_domain

from boutique.product.product import Product

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20


def _positive_int(value, default):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


@dataclass(frozen=True)
class ProductPage:
    items: list
    page: int
    limit: int
    total: int

    @property
    def total_pages(self):
        return math.ceil(self.total / self.limit)


def list_products(category, page=None, limit=None):
    page = _positive_int(page, DEFAULT_PAGE)
    limit = _positive_int(limit, DEFAULT_LIMIT)

    repo = current_domain.repository_for(Product)
    items, total = repo.page_in_category(category, offset=(page - 1) * limit, limit=limit)
    return ProductPage(items=list(items), page=page, limit=limit, total=total)


def get_product(category, product_id):
    return current_domain.repository_for(Product).get_in_category(category, product_id)


def grouped_by_name(category):
    """Map each product name to every product carrying it, in insertion order."""
    grouped = {}
    for product in current_domain.repository_for(Product).in_category(category):
        grouped.setdefault(product.name or "", []).append(product)
    return grouped
