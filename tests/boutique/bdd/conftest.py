"""Shared BDD fixtures and step definitions for the stock ledger."""

import pytest
from boutique.exceptions import error_message
from boutique.ledger.sale_entry import SaleEntry
from boutique.product.creation import CreateProduct
from boutique.product.product import Product
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for the last failed mutation."""
    return {"exc": None}


@pytest.fixture()
def products():
    return []


def _create(category, name, price, stock):
    command = CreateProduct(category=category, name=name, price=str(price), stock=str(stock))
    product_id = current_domain.process(command, asynchronous=False)
    return current_domain.repository_for(Product).get(product_id)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse('a shoe "{name}" priced {price:d} with stock {stock:d}'),
    target_fixture="product",
)
def a_shoe(name, price, stock, products):
    product = _create("Shoes", name, price, stock)
    products.append(product)
    return product


@given(
    parsers.cfparse('a bag "{name}" priced {price:d} with stock {stock:d}'),
    target_fixture="product",
)
@given(
    parsers.cfparse('another bag "{name}" priced {price:d} with stock {stock:d}'),
    target_fixture="product",
)
def a_bag(name, price, stock, products):
    product = _create("Bags", name, price, stock)
    products.append(product)
    return product


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the product stock is {stock:d}"))
def product_stock_is(product, stock):
    assert current_domain.repository_for(Product).get(product.id).stock == stock


@then(parsers.cfparse("the ledger has {count:d} entries"))
def ledger_has_n_entries(count):
    assert len(current_domain.repository_for(SaleEntry).entries()) == count


@then("the ledger is empty")
def ledger_is_empty():
    assert current_domain.repository_for(SaleEntry).entries() == []


@then(parsers.cfparse('the last ledger entry is an "{entry_type}" of {quantity:d} totalling {total:d}'))
@then(parsers.cfparse('the last ledger entry is a "{entry_type}" of {quantity:d} totalling {total:d}'))
def last_entry_is(entry_type, quantity, total):
    entry = current_domain.repository_for(SaleEntry).entries()[-1]
    assert entry.entry_type == entry_type
    assert entry.quantity == quantity
    assert entry.total == total


@then(parsers.cfparse('the mutation fails with "{message}"'))
def mutation_fails_with(error, message):
    assert error["exc"] is not None
    assert error_message(error["exc"]) == message
    error["exc"] = None
