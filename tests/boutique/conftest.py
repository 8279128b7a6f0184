import os

import pytest


@pytest.fixture(scope="session")
def _boutique_domain(request):
    """Initialize the boutique domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from boutique.domain import boutique

    boutique.init()
    return boutique


@pytest.fixture(scope="session", autouse=True)
def setup_db(_boutique_domain):
    from boutique.utils.db import drop_db, setup_db

    setup_db(_boutique_domain)

    yield

    drop_db(_boutique_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_boutique_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _boutique_domain.domain_context()
    ctx.push()

    yield

    from boutique.storage import reset_image_store
    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    reset_image_store()
    ctx.pop()


@pytest.fixture()
def make_product():
    """Create a product through the command path and return the stored aggregate."""
    from boutique.product.creation import CreateProduct
    from boutique.product.product import Product
    from protean.utils.globals import current_domain

    def _make(category="Shoes", **fields):
        fields.setdefault("name", "Air")
        fields.setdefault("stock", "10")
        fields.setdefault("price", "100")
        product_id = current_domain.process(CreateProduct(category=category, **fields), asynchronous=False)
        return current_domain.repository_for(Product).get(product_id)

    return _make
