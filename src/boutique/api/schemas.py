"""Pydantic request/response schemas for the Boutique API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands. Responses are rendered in camelCase, except for
``image_url`` which clients already depend on.
"""

import json
from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from boutique.product.product import ProductCategory


class CamelModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
def _as_text(value):
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value) if isinstance(value, dict) else str(value)


class CreateProductRequest(BaseModel):
    """JSON body or multipart form fields for a new product. Numbers may arrive as text."""

    name: str | None = None
    color: str | None = None
    description: str | None = None
    stock: int | float | str | None = None
    price: int | float | str | None = None
    image_url: str | None = Field(default=None, validation_alias=AliasChoices("image_url", "imageUrl"))
    size: str | None = None
    gender: str | None = None
    age_group: str | None = Field(default=None, validation_alias=AliasChoices("ageGroup", "age_group"))
    sizes: dict[str, str | int | float] | str | None = None

    def command_fields(self):
        return {
            "name": self.name,
            "color": self.color,
            "description": self.description,
            "stock": _as_text(self.stock),
            "price": _as_text(self.price),
            "image_url": self.image_url,
            "size": self.size,
            "gender": self.gender,
            "age_group": self.age_group,
            "sizes": _as_text(self.sizes),
        }


class UpdateProductRequest(BaseModel):
    name: str | None = None
    color: str | None = None
    description: str | None = None
    stock: int | None = None
    price: float | None = None
    image_url: str | None = Field(default=None, validation_alias=AliasChoices("image_url", "imageUrl"))
    size: str | None = None
    gender: str | None = None
    age_group: str | None = Field(default=None, validation_alias=AliasChoices("ageGroup", "age_group"))
    sizes: dict[str, str | int | float] | str | None = None

    def command_fields(self):
        fields = self.model_dump(exclude={"sizes"})
        fields["sizes"] = _as_text(self.sizes)
        return fields


class StockChangeRequest(BaseModel):
    """``bool`` is listed first so ``true`` is rejected instead of read as 1."""

    quantity: bool | int | float | str | None = None


# ---------------------------------------------------------------------------
# Product Response Schemas
# ---------------------------------------------------------------------------
class ProductRecord(CamelModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    category: str
    name: str | None = None
    color: str | None = None
    description: str | None = None
    stock: int = 0
    price: float = 0.0
    image_url: str | None = Field(default=None, alias="image_url")
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ShoeRecord(ProductRecord):
    gender: str | None = None
    age_group: str | None = None
    sizes: dict[str, str] = Field(default_factory=dict)


class SizedRecord(ProductRecord):
    size: str | None = None


AnyProductRecord = ShoeRecord | SizedRecord


def product_record(product) -> AnyProductRecord:
    base = {
        "id": str(product.id),
        "category": product.category,
        "name": product.name,
        "color": product.color,
        "description": product.description,
        "stock": product.stock or 0,
        "price": product.price or 0.0,
        "image_url": product.image_url,
        "created_at": product.created_at,
        "updated_at": product.updated_at,
    }
    if product.category == ProductCategory.SHOES.value:
        return ShoeRecord(
            **base,
            gender=product.gender,
            age_group=product.age_group,
            sizes=product.sizes.to_mapping() if product.sizes else {},
        )
    return SizedRecord(**base, size=product.size)


class ProductPageResponse(CamelModel):
    data: list[AnyProductRecord]
    page: int
    limit: int
    total: int
    total_pages: int


class MessageResponse(BaseModel):
    message: str


# ---------------------------------------------------------------------------
# Ledger Response Schemas
# ---------------------------------------------------------------------------
class SaleEntryRecord(CamelModel):
    id: str
    product_id: str
    category: str
    name: str | None = None
    quantity: int
    price: float = 0.0
    total: float = 0.0
    type: str
    date: datetime


def sale_entry_record(entry) -> SaleEntryRecord:
    return SaleEntryRecord(
        id=str(entry.id),
        product_id=str(entry.product_id),
        category=entry.category,
        name=entry.name,
        quantity=entry.quantity,
        price=entry.price or 0.0,
        total=entry.total or 0.0,
        type=entry.entry_type,
        date=entry.date,
    )


class ReconciliationRecord(CamelModel):
    product_id: str
    category: str
    name: str | None = None
    stock: int
    ledger_stock: int
    drift: int
    is_consistent: bool


# ---------------------------------------------------------------------------
# Dashboard Response Schemas
# ---------------------------------------------------------------------------
class SummarySchema(CamelModel):
    total_products: int
    total_stock: int
    total_value: float
    total_sales: int
    total_revenue: float
    total_restocked: int


class TrendPointSchema(CamelModel):
    date: str
    sales: int
    revenue: float


class LowStockItemSchema(CamelModel):
    name: str | None = None
    stock: int
    price: float
    category: str


class TopSellerSchema(CamelModel):
    name: str | None = None
    quantity: int
    revenue: float


class StockStatusSchema(CamelModel):
    in_stock: int
    low_stock: int
    out_of_stock: int


class DashboardStatsResponse(CamelModel):
    summary: SummarySchema
    sales_by_category: dict[str, int]
    sales_trend: list[TrendPointSchema]
    low_stock_items: list[LowStockItemSchema]
    top_selling: list[TopSellerSchema]
    stock_value_by_category: dict[str, float]


class InventoryStatusResponse(CamelModel):
    total_products: int
    stock_status: StockStatusSchema
    stock_value_by_category: dict[str, float]


class SalesBucketSchema(CamelModel):
    sales: int
    revenue: float


class SalesAnalyticsResponse(CamelModel):
    period: str
    start_date: datetime
    end_date: datetime
    data: dict[str, SalesBucketSchema]
