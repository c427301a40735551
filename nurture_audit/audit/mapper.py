import json
import re
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import ValidationError

from nurture_audit.core.errors import MalformedResponseError, SchemaViolationError
from nurture_audit.schemas.result import AuditResult

_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*\n(.*?)\s*```\s*$", re.DOTALL | re.IGNORECASE)


def format_field_path(loc: Sequence[Union[str, int]]) -> str:
    """('emailReviews', 0, 'positioning') -> 'emailReviews[0].positioning'"""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        elif path:
            path += f".{part}"
        else:
            path = str(part)
    return path or "<root>"


def parse_json(raw: Optional[str]) -> Any:
    if raw is None or not raw.strip():
        raise MalformedResponseError("Model returned empty content")

    m = _FENCE_RE.match(raw)
    text = m.group(1) if m else raw
    try:
        return json.loads(text)
    except ValueError as e:
        raise MalformedResponseError(f"Model did not return valid JSON: {e}") from e


def _schema_violation(e: ValidationError) -> SchemaViolationError:
    errors: List[Dict[str, str]] = [
        {"field": format_field_path(err["loc"]), "message": err["msg"]}
        for err in e.errors()
    ]
    first = errors[0]
    return SchemaViolationError(first["field"], first["message"], errors=errors)


def check_cardinality(result: AuditResult, expected_emails: int) -> None:
    counts = {
        "emailReviews": len(result.email_reviews),
        "rewrite": len(result.rewrite),
        "hubspotLayout": len(result.hubspot_layout),
    }
    errors = [
        {"field": field, "message": f"expected {expected_emails} entries, got {count}"}
        for field, count in counts.items()
        if count != expected_emails
    ]
    if errors:
        raise SchemaViolationError(errors[0]["field"], errors[0]["message"], errors=errors)


def map_audit_response(raw: Optional[str], expected_emails: Optional[int] = None) -> AuditResult:
    """
    Converts the model's raw text into a validated AuditResult.

    Raises MalformedResponseError when the text is not JSON, and
    SchemaViolationError when the JSON does not match the result shape
    (missing field, wrong kind, enum outside its closed set, or per-email
    lists whose length differs from expected_emails when that is given).
    """
    data = parse_json(raw)
    if not isinstance(data, dict):
        raise SchemaViolationError("<root>", f"expected a JSON object, got {type(data).__name__}")

    try:
        result = AuditResult.model_validate(data)
    except ValidationError as e:
        raise _schema_violation(e) from e

    if expected_emails is not None:
        check_cardinality(result, expected_emails)
    return result
