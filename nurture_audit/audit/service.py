import logging
from typing import Any, Dict

from nurture_audit.audit.client import AuditClient
from nurture_audit.audit.mapper import map_audit_response
from nurture_audit.audit.prompts import build_audit_request
from nurture_audit.core.errors import AuditError
from nurture_audit.rules.draft_rules import ensure_submittable
from nurture_audit.schemas.flow import AuditRequest
from nurture_audit.schemas.result import AuditResult

logger = logging.getLogger(__name__)

# UI page id -> AuditResult field
VIEWS = {
    "dashboard": "dashboard",
    "health": "flow_health",
    "review": "email_reviews",
    "rewrite": "rewrite",
    "hubspot": "hubspot_layout",
}


def run_audit(request: AuditRequest, client: AuditClient) -> AuditResult:
    """
    1) Deterministic draft checks (no model call on failure)
    2) Prompt + output shape
    3) Model call
    4) Parse and validate, including one entry per email in each list
    """
    ensure_submittable(request.emails)

    ctx = request.context
    logger.info(
        "Auditing flow: industry=%s goal=%s language=%s emails=%d",
        ctx.industry, ctx.goal, ctx.language, len(request.emails),
    )

    prompt, shape = build_audit_request(ctx, request.emails)
    raw = client.complete(prompt, shape)

    try:
        return map_audit_response(raw, expected_emails=len(request.emails))
    except AuditError as e:
        logger.warning("Rejected model output (%s): %s", e.code, e.message)
        raise


def select_view(result: AuditResult, view: str) -> Any:
    """Returns the camelCase JSON of one result page."""
    if view not in VIEWS:
        raise KeyError(view)
    dumped: Dict[str, Any] = result.model_dump(by_alias=True, include={VIEWS[view]})
    return next(iter(dumped.values()))
