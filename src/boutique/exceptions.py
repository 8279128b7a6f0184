"""Domain error taxonomy for stock mutations.

Both errors are Protean ``ValidationError`` subclasses so that anything
handling validation failures generically keeps working; the API maps them
to 400 responses. Missing products surface as Protean's
``ObjectNotFoundError``.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class InvalidQuantityError(ValidationError):
    """Quantity is missing, non-numeric, or not a positive integer."""

    def __init__(self, message="Invalid quantity"):
        super().__init__({"quantity": [message]})


class InsufficientStockError(ValidationError):
    """A deduction asks for more units than are currently in stock."""

    def __init__(self, available, requested):
        self.available = available
        self.requested = requested
        super().__init__({"quantity": [f"Not enough stock: {available} available, {requested} requested"]})


def product_not_found(label):
    return ObjectNotFoundError(f"{label} not found")


def error_message(exc):
    """Flatten a Protean exception into a single human-readable string.

    Validation errors carry a ``messages`` dict; others (``ObjectNotFoundError``
    among them) only carry their first positional argument.
    """
    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict):
        for value in messages.values():
            if isinstance(value, list | tuple) and value:
                return str(value[0])
            if value:
                return str(value)
    if messages:
        return str(messages)
    if exc.args and exc.args[0]:
        return str(exc.args[0])
    return exc.__class__.__name__
