class InventoryError(Exception):
    """Base error for the inventory query service."""


class ValidationError(InventoryError):
    """A query-string value failed a type or range constraint."""

    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field


class StoreError(InventoryError):
    """The relational store rejected or failed the query."""
