"""Boutique bounded context — catalogue, stock ledger and dashboard analytics.

Products (shoes, bags, dresses) and the append-only sales ledger live in one
domain so that a stock mutation and its ledger entry commit in the same
Unit of Work.
"""

from protean.domain import Domain

from boutique.utils.logging import configure_logging, get_logger

configure_logging(log_file_prefix="boutique")

logger = get_logger(__name__)

boutique = Domain(name="boutique")
