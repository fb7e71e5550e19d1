"""Domain errors raised by the inventory services.

Routes never catch these; ``cafe_pos.main`` registers handlers that map
them to HTTP status codes, and the API client maps the status codes back.
"""


class PosError(Exception):
    """Base class for all domain errors."""

    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(PosError):
    """Raised when a referenced material, product, sale or user does not exist."""

    status_code = 404

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} '{entity_id}' not found")

    @classmethod
    def from_detail(cls, detail: str) -> "NotFoundError":
        """Rebuild from an already formatted message (e.g. an HTTP 404 body)."""
        err = cls.__new__(cls)
        err.entity = None
        err.entity_id = None
        PosError.__init__(err, detail)
        return err


class ValidationError(PosError):
    """Raised for non-positive quantities, missing fields and similar input errors."""

    status_code = 400


class ConflictError(PosError):
    """Raised when an id or unique key is already taken."""

    status_code = 409
