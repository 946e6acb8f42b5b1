"""Domain-specific exceptions: framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class StorageError(Exception):
    """Raised when the relational store fails to execute an operation.

    The underlying driver error is chained as ``__cause__`` and already
    logged; the message carries only the operation name.
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"storage operation '{operation}' failed")
