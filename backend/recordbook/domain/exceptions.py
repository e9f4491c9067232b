"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised by repositories when a row disappears between lookup and write."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class RepositoryError(Exception):
    """Raised by repositories when the underlying store rejects an operation."""

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed: {cause}")
