"""Administrative overrides: field updates and deletion.

Neither operation writes to the ledger. Updating ``stock`` or ``price`` here
is a correction path and can make ledger-implied stock drift from the stock
field; the reconciliation report shows that drift.
"""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from boutique.domain import boutique
from boutique.product.product import Product

logger = structlog.get_logger(__name__)


@boutique.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    category = String(required=True, max_length=20)
    name = String(max_length=255)
    color = String(max_length=50)
    description = Text()
    stock = Integer()
    price = Float()
    image_url = String(max_length=500)
    size = String(max_length=50)
    gender = String(max_length=20)
    age_group = String(max_length=20)
    sizes = Text()  # JSON object


@boutique.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)
    category = String(required=True, max_length=20)


_UPDATABLE = ("name", "color", "description", "stock", "price", "image_url", "size", "gender", "age_group", "sizes")


@boutique.command_handler(part_of=Product)
class ProductManagementHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_in_category(command.category, command.product_id)

        changes = {field: getattr(command, field) for field in _UPDATABLE if getattr(command, field) is not None}
        applied = product.update_fields(**changes)
        repo.add(product)

        if "stock" in applied or "price" in applied:
            logger.warning(
                "Stock or price overridden outside the ledger",
                product_id=str(product.id),
                category=product.category,
                stock=product.stock,
                price=product.price,
            )
        return str(product.id)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_in_category(command.category, command.product_id)
        repo.remove(product)

        logger.info("Product deleted", product_id=str(product.id), category=product.category)
        return str(product.id)
