"""Error taxonomy for the checkout pipeline.

User-correctable problems are Protean ``ValidationError`` subclasses carrying a
``{field: [message]}`` payload, so the API layer can surface the message
verbatim. Infrastructure failures are plain exceptions.
"""

from protean.exceptions import ValidationError


class FormatError(ValidationError):
    """A payment field does not match its expected shape."""


class ExpiredError(ValidationError):
    """A card expiry date is not in the future."""


class ProductNotFoundError(ValidationError):
    """A line item references a product that is missing or inactive."""


class InsufficientInventoryError(ValidationError):
    """Requested quantity exceeds the product's available stock."""


class PersistenceError(Exception):
    """The order could not be stored. Nothing was committed."""


class DeliveryError(Exception):
    """The notification transport rejected or failed to deliver a message."""

    def __init__(self, message: str, order_number: str | None = None):
        super().__init__(message)
        self.order_number = order_number


def first_error_message(exc: ValidationError) -> str:
    """Flatten a field-scoped error payload to its first human message."""
    messages = exc.messages
    if isinstance(messages, dict):
        for value in messages.values():
            if isinstance(value, list | tuple) and value:
                return str(value[0])
            if value:
                return str(value)
    return str(messages)
