"""Product creation — command and handler.

Creating a product records its opening stock in the ledger as an ``add``
entry, in the same Unit of Work as the product itself.
"""

import structlog
from protean import handle
from protean.fields import String, Text
from protean.utils.globals import current_domain

from boutique.domain import boutique
from boutique.ledger.sale_entry import EntryType, SaleEntry
from boutique.product.product import Product

logger = structlog.get_logger(__name__)


@boutique.command(part_of="Product")
class CreateProduct:
    category = String(required=True, max_length=20)
    name = String(max_length=255)
    color = String(max_length=50)
    description = Text()
    stock = Text()  # Raw input, coerced leniently
    price = Text()  # Raw input, coerced leniently
    image_url = String(max_length=500)
    size = String(max_length=50)
    gender = String(max_length=20)
    age_group = String(max_length=20)
    sizes = Text()  # JSON object: {"US": "9", "EU": "42"}


@boutique.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            category=command.category,
            name=command.name,
            color=command.color,
            description=command.description,
            stock=command.stock,
            price=command.price,
            image_url=command.image_url,
            size=command.size,
            gender=command.gender,
            age_group=command.age_group,
            sizes=command.sizes,
        )
        current_domain.repository_for(Product).add(product)
        current_domain.repository_for(SaleEntry).append(SaleEntry.record(product, EntryType.ADD, product.stock))

        logger.info(
            "Product created with opening stock",
            product_id=str(product.id),
            category=product.category,
            stock=product.stock,
        )
        return str(product.id)
