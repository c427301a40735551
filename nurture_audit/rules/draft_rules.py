# Deterministic checks that run before any model call.
from typing import Any, Dict, List, Sequence

from nurture_audit.core.errors import InvalidInputError
from nurture_audit.schemas.flow import EmailDraft


def evaluate_drafts(emails: Sequence[EmailDraft]) -> List[Dict[str, Any]]:
    issues: List[Dict[str, Any]] = []

    if len(emails) == 0:
        issues.append({
            "code": "NO_EMAILS",
            "message": "The flow needs at least one email.",
        })

    for position, email in enumerate(emails, start=1):
        if not email.content.strip():
            issues.append({
                "code": "EMPTY_EMAIL",
                "email_id": email.id,
                "position": position,
                "message": f"Email {position} has no content.",
            })

    return issues


def ensure_submittable(emails: Sequence[EmailDraft]) -> None:
    """Raises InvalidInputError unless every draft has non-blank content."""
    issues = evaluate_drafts(emails)
    if issues:
        raise InvalidInputError(
            "Please fill in all email sequence contents.",
            issues=issues,
        )
