"""FastAPI routes for the Boutique domain — products, stock, sales ledger and dashboard."""

from fastapi import APIRouter, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as SchemaValidationError
from protean.utils.globals import current_domain

from boutique.api.schemas import (
    AnyProductRecord,
    CreateProductRequest,
    DashboardStatsResponse,
    InventoryStatusResponse,
    MessageResponse,
    ProductPageResponse,
    ReconciliationRecord,
    SaleEntryRecord,
    SalesAnalyticsResponse,
    StockChangeRequest,
    UpdateProductRequest,
    product_record,
    sale_entry_record,
)
from boutique.dashboard import service as dashboard
from boutique.ledger.queries import reconciliation_report, sales_logs
from boutique.product import queries
from boutique.product.creation import CreateProduct
from boutique.product.management import DeleteProduct, UpdateProduct
from boutique.product.product import ProductCategory, parse_quantity
from boutique.product.stock import AddStock, DeductStock
from boutique.storage import get_image_store


async def _read_create_request(request: Request) -> tuple[CreateProductRequest, UploadFile | None]:
    """Accept a multipart form (optionally carrying an ``image`` file) or a JSON body."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("multipart/form-data") or content_type.startswith(
        "application/x-www-form-urlencoded"
    ):
        form = await request.form()
        image = form.get("image")
        fields = {key: value for key, value in form.items() if key != "image" and isinstance(value, str)}
        upload = image if image is not None and not isinstance(image, str) and image.filename else None
        try:
            return CreateProductRequest.model_validate(fields), upload
        except SchemaValidationError as exc:
            raise RequestValidationError(exc.errors()) from None

    body = await request.body()
    if not body:
        return CreateProductRequest(), None
    try:
        return CreateProductRequest.model_validate_json(body), None
    except SchemaValidationError as exc:
        raise RequestValidationError(exc.errors()) from None


# ---------------------------------------------------------------------------
# Product Routers (one per category)
# ---------------------------------------------------------------------------
def category_router(category: ProductCategory) -> APIRouter:
    """Build the CRUD and stock routes for one category under ``/api/<slug>``."""
    router = APIRouter(prefix=f"/api/{category.slug}", tags=[category.slug])

    @router.get("", response_model=ProductPageResponse)
    async def list_products(page: str | None = None, limit: str | None = None) -> ProductPageResponse:
        result = queries.list_products(category, page=page, limit=limit)
        return ProductPageResponse(
            data=[product_record(product) for product in result.items],
            page=result.page,
            limit=result.limit,
            total=result.total,
            total_pages=result.total_pages,
        )

    # Registered before /{product_id} so "grouped" is not read as an id
    @router.get("/grouped", response_model=dict[str, list[AnyProductRecord]])
    async def grouped_products() -> dict[str, list[AnyProductRecord]]:
        return {
            name: [product_record(product) for product in products]
            for name, products in queries.grouped_by_name(category).items()
        }

    @router.get("/{product_id}", response_model=AnyProductRecord)
    async def get_product(product_id: str) -> AnyProductRecord:
        return product_record(queries.get_product(category, product_id))

    @router.post("", status_code=201, response_model=AnyProductRecord)
    async def create_product(request: Request) -> AnyProductRecord:
        body, upload = await _read_create_request(request)
        fields = body.command_fields()
        if upload is not None:
            fields["image_url"] = get_image_store().save(upload.filename, upload.file)

        command = CreateProduct(category=category.value, **fields)
        product_id = current_domain.process(command, asynchronous=False)
        return product_record(queries.get_product(category, product_id))

    @router.put("/{product_id}", response_model=AnyProductRecord)
    async def update_product(product_id: str, body: UpdateProductRequest) -> AnyProductRecord:
        command = UpdateProduct(product_id=product_id, category=category.value, **body.command_fields())
        current_domain.process(command, asynchronous=False)
        return product_record(queries.get_product(category, product_id))

    @router.delete("/{product_id}", response_model=MessageResponse)
    async def delete_product(product_id: str) -> MessageResponse:
        command = DeleteProduct(product_id=product_id, category=category.value)
        current_domain.process(command, asynchronous=False)
        return MessageResponse(message=f"{category.label} deleted successfully")

    @router.post("/{product_id}/add", response_model=AnyProductRecord)
    async def add_stock(product_id: str, body: StockChangeRequest) -> AnyProductRecord:
        command = AddStock(product_id=product_id, category=category.value, quantity=parse_quantity(body.quantity))
        current_domain.process(command, asynchronous=False)
        return product_record(queries.get_product(category, product_id))

    @router.post("/{product_id}/deduct", response_model=AnyProductRecord)
    async def deduct_stock(product_id: str, body: StockChangeRequest) -> AnyProductRecord:
        command = DeductStock(product_id=product_id, category=category.value, quantity=parse_quantity(body.quantity))
        current_domain.process(command, asynchronous=False)
        return product_record(queries.get_product(category, product_id))

    return router


shoes_router = category_router(ProductCategory.SHOES)
bags_router = category_router(ProductCategory.BAGS)
dresses_router = category_router(ProductCategory.DRESSES)


# ---------------------------------------------------------------------------
# Sales Ledger Router
# ---------------------------------------------------------------------------
sales_router = APIRouter(prefix="/api/sales", tags=["sales"])


@sales_router.get("/logs", response_model=list[SaleEntryRecord])
async def get_sales_logs(
    start: str | None = None, end: str | None = None, productId: str | None = None
) -> list[SaleEntryRecord]:
    return [sale_entry_record(entry) for entry in sales_logs(start=start, end=end, product_id=productId)]


@sales_router.get("/reconciliation", response_model=list[ReconciliationRecord])
async def get_reconciliation() -> list[ReconciliationRecord]:
    return [ReconciliationRecord.model_validate(row) for row in reconciliation_report()]


# ---------------------------------------------------------------------------
# Dashboard Router
# ---------------------------------------------------------------------------
dashboard_router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@dashboard_router.get("/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(startDate: str | None = None, endDate: str | None = None) -> DashboardStatsResponse:
    return DashboardStatsResponse.model_validate(dashboard.dashboard_stats(start_date=startDate, end_date=endDate))


@dashboard_router.get("/inventory-status", response_model=InventoryStatusResponse)
async def get_inventory_status() -> InventoryStatusResponse:
    return InventoryStatusResponse.model_validate(dashboard.inventory_status())


@dashboard_router.get("/sales-analytics", response_model=SalesAnalyticsResponse)
async def get_sales_analytics(period: str | None = None) -> SalesAnalyticsResponse:
    return SalesAnalyticsResponse.model_validate(dashboard.sales_analytics(period=period))
