"""Error Hierarchy — closed set of failure kinds raised by Resource Stores.

Invariants:
    - Every error carries exactly one ErrorKind (VALIDATION, MALFORMED_ID, NOT_FOUND, INTERNAL)
    - http_status is derived from the kind, never chosen at the raise site
    - to_response() produces the REST envelope: {success: false, message, error?}
    - No internal details leaked in user-facing messages (INTERNAL hides the cause)

Design Decisions:
    - Single hierarchy with StoreError base: handlers branch on exc.kind,
      not on the exception's dynamic type name
"""

from enum import Enum


class ErrorKind(str, Enum):
    """The four ways a store operation can fail."""
    VALIDATION = "validation"
    MALFORMED_ID = "malformed_id"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


HTTP_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.MALFORMED_ID: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}


class StoreError(Exception):
    """Base exception for all Resource Store failures."""

    kind: ErrorKind = ErrorKind.INTERNAL
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    @property
    def http_status(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        body: dict = {"success": False, "message": self.message}
        if self.detail:
            body["error"] = self.detail
        return body


# ─── Client Errors (400-level) ──────────────────────────────────

class RecordValidationError(StoreError):
    """Payload is missing required fields or violates field constraints."""
    kind = ErrorKind.VALIDATION
    code = "VALIDATION_ERROR"


class MalformedIdentifierError(StoreError):
    """Identifier fails the store's well-formedness check."""
    kind = ErrorKind.MALFORMED_ID
    code = "MALFORMED_IDENTIFIER"

    def __init__(self, resource: str, raw_id: str):
        super().__init__(
            f"Invalid {resource} ID format",
            f"'{raw_id}' is not a valid identifier",
        )
        self.raw_id = raw_id


class RecordNotFoundError(StoreError):
    """Well-formed identifier with no matching record."""
    kind = ErrorKind.NOT_FOUND
    code = "RECORD_NOT_FOUND"

    def __init__(self, resource: str, record_id: object):
        super().__init__(f"{resource.capitalize()} not found")
        self.record_id = record_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreInternalError(StoreError):
    """Underlying store failed (connectivity, driver, unexpected state)."""
    kind = ErrorKind.INTERNAL
    code = "INTERNAL_ERROR"

    def __init__(self, operation: str, detail: str | None = None):
        super().__init__(f"Failed to {operation}", detail)
        self.operation = operation
