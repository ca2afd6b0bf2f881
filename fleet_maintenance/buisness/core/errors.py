"""
Domain exceptions for the reconciliation engine

These exceptions represent business rule violations and missing references.
Managers raise them; the service layer turns them into action results.
"""


class ReconciliationError(Exception):
    """Base exception for all reconciliation domain errors"""

    kind = "error"


class NotFoundError(ReconciliationError):
    """Raised when a referenced entity does not exist"""

    kind = "not_found"

    def __init__(self, entity, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class ValidationError(ReconciliationError):
    """Raised when action input fails the calling layer's checks"""

    kind = "validation"

    def __init__(self, field, message):
        self.field = field
        super().__init__(f"{field}: {message}")


class InvalidTransitionError(ReconciliationError):
    """Raised when a status transition is not allowed"""

    kind = "invalid_transition"

    def __init__(self, entity, from_status, to_status):
        self.entity = entity
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(f"Invalid {entity} status transition: {from_status} → {to_status}")


class ConcurrencyError(ReconciliationError):
    """Raised when a row changed underneath the current unit of work"""

    kind = "conflict"
