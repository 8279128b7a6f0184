"""Audited stock mutations (add and deduct).

Every successful mutation updates the product and appends exactly one
ledger entry inside the handler's Unit of Work; if either write fails,
neither is committed. Quantities are validated before the product is
looked up, so a bad quantity never touches the stores.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from boutique.domain import boutique
from boutique.ledger.sale_entry import EntryType, SaleEntry
from boutique.product.product import Product, parse_quantity

logger = structlog.get_logger(__name__)


@boutique.command(part_of="Product")
class AddStock:
    product_id = Identifier(required=True)
    category = String(required=True, max_length=20)
    quantity = Integer(required=True)


@boutique.command(part_of="Product")
class DeductStock:
    product_id = Identifier(required=True)
    category = String(required=True, max_length=20)
    quantity = Integer(required=True)


@boutique.command_handler(part_of=Product)
class StockMutationHandler:
    @handle(AddStock)
    def add_stock(self, command):
        quantity = parse_quantity(command.quantity)
        repo = current_domain.repository_for(Product)
        product = repo.get_in_category(command.category, command.product_id)

        product.add_stock(quantity)
        repo.add(product)
        current_domain.repository_for(SaleEntry).append(SaleEntry.record(product, EntryType.ADD, quantity))

        logger.info(
            "Stock added",
            product_id=str(product.id),
            category=product.category,
            quantity=quantity,
            stock=product.stock,
        )
        return product.stock

    @handle(DeductStock)
    def deduct_stock(self, command):
        quantity = parse_quantity(command.quantity)
        repo = current_domain.repository_for(Product)
        product = repo.get_in_category(command.category, command.product_id)

        product.deduct_stock(quantity)
        repo.add(product)
        current_domain.repository_for(SaleEntry).append(SaleEntry.record(product, EntryType.DEDUCT, quantity))

        logger.info(
            "Stock deducted",
            product_id=str(product.id),
            category=product.category,
            quantity=quantity,
            stock=product.stock,
        )
        return product.stock
