from typing import List, Optional


class AuditError(Exception):
    """Base class for every classified audit failure."""

    code = "audit_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(AuditError):
    """Drafts failed the pre-flight checks; no external call was made."""

    code = "invalid_input"

    def __init__(self, message: str, issues: Optional[List[dict]] = None):
        super().__init__(message)
        self.issues = issues or []


class MalformedResponseError(AuditError):
    """The model output could not be parsed as JSON at all."""

    code = "malformed_response"


class SchemaViolationError(AuditError):
    """
    Parsed JSON does not match the audit result shape.
    field_path names the first offending field, e.g. "dashboard.score";
    errors carries every offending path with its message.
    """

    code = "schema_violation"

    def __init__(self, field_path: str, message: str, errors: Optional[List[dict]] = None):
        super().__init__(f"{field_path}: {message}")
        self.field_path = field_path
        self.errors = errors or [{"field": field_path, "message": message}]


class TransportFailureError(AuditError):
    """The external model call did not complete (network, auth, quota)."""

    code = "transport_failure"
