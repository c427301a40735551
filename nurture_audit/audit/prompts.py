import re
from typing import Any, Dict, List, Sequence, Tuple

from nurture_audit.schemas.flow import AuditContext, EmailDraft

EMAIL_DELIMITER = "\n\n---\n\n"

SYSTEM_FLOW_STRATEGIST = """You are a senior B2B SaaS lifecycle marketing strategist.
You MUST return ONLY valid JSON matching the requested schema.
No markdown. No extra commentary. No additional keys.
"""

# Lines made only of dashes would read as an extra email boundary.
_DELIMITER_LINE_RE = re.compile(r"^[ \t]*-{3,}[ \t]*(?=\r?$)", re.MULTILINE)


def _string() -> Dict[str, Any]:
    return {"type": "string"}


def _strings() -> Dict[str, Any]:
    return {"type": "array", "items": _string()}


def _enum(*values: str) -> Dict[str, Any]:
    return {"type": "string", "enum": list(values)}


def _object(**properties: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
        "additionalProperties": False,
    }


def _list_of(item: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "array", "items": item}


AUDIT_OUTPUT_SHAPE: Dict[str, Any] = _object(
    dashboard=_object(
        verdict=_string(),
        winsRisks=_list_of(_object(type=_enum("win", "risk"), text=_string())),
        score={"type": "number"},
        fixFirst=_string(),
    ),
    flowHealth=_object(
        logicalStructure=_enum("Yes", "Partially", "No"),
        momentumCheck=_string(),
        ctaProgression=_string(),
        articleMix=_string(),
        improvements=_strings(),
    ),
    emailReviews=_list_of(_object(
        name=_string(),
        role=_string(),
        positioning=_enum("Correct", "Move earlier", "Move later"),
        whatWorks=_strings(),
        toImprove=_strings(),
        ctaStrength=_object(
            assessment=_enum("Strong", "Needs improvement"),
            reasoning=_string(),
        ),
        articleReview=_object(
            status=_enum("Keep", "Replace", "Optional"),
            reasoning=_string(),
        ),
    )),
    rewrite=_list_of(_object(
        name=_string(),
        subjects=_strings(),
        preheader=_string(),
        strategicPurpose=_string(),
        copy=_string(),
        suggestedArticles=_strings(),
    )),
    hubspotLayout=_list_of(_object(
        emailName=_string(),
        blocks=_list_of(_object(label=_string(), content=_string())),
    )),
)


def _protect_delimiters(content: str) -> str:
    return _DELIMITER_LINE_RE.sub("- - -", content)


def render_emails(emails: Sequence[EmailDraft]) -> str:
    segments: List[str] = []
    for i, email in enumerate(emails, start=1):
        segments.append(f"Email {i}:\n{_protect_delimiters(email.content)}")
    return EMAIL_DELIMITER.join(segments)


def build_user_prompt(context: AuditContext, emails: Sequence[EmailDraft]) -> str:
    return (
        "Evaluate a nurturing flow for leads who have downloaded educational materials "
        "(guides/checklists).\n\n"
        "STRATEGIC CONTEXT:\n"
        "- Audience: Problem-aware leads who have exchanged emails for educational content.\n"
        "- Logic: Reinforce value of downloaded materials -> Practical behavioral insights -> "
        f"Product use cases (session replay, friction signals) -> Intent step ({context.goal}).\n"
        f"- Language: {context.language}\n"
        f"- Industry: {context.industry}\n"
        f"- Personas: {', '.join(context.personas)}\n"
        "- Product Features: Session replay, heatmaps, funnels/forms, rage clicks, friction signals.\n\n"
        "EMAILS TO AUDIT:\n"
        f"{render_emails(emails)}\n\n"
        "YOUR TASKS (MANDATORY STRUCTURE):\n"
        '[PAGE 1] Dashboard: Provide a verdict on intent building, wins/risks, score (1-10), '
        'and the #1 "Fix First" priority.\n'
        "[PAGE 2] Flow Health: Check logical structure (Yes/No/Partially), momentum drops, "
        "CTA intent progression, and article mix. List 5-8 improvements.\n"
        "[PAGE 3] Email Review: For EACH email, provide role, positioning, what works, "
        "improvements, CTA strength (with reasoning), and article assessment.\n"
        "[PAGE 4] Rewrite: Provide a full rewritten version of the flow. Scannable copy, "
        "high-intent subjects, one primary CTA per email. Focus on friction signals.\n"
        "[PAGE 5] HubSpot Blocks: Provide a simple implementation layout plan for EACH email "
        "(Header, Insight, Articles, CTA, Footer).\n\n"
        f"Return exactly {len(emails)} entries in emailReviews, rewrite and hubspotLayout, "
        "one per email, in the order given.\n"
        "Return as valid JSON matching the response schema."
    )


def build_audit_request(
    context: AuditContext, emails: Sequence[EmailDraft]
) -> Tuple[str, Dict[str, Any]]:
    """
    Returns (prompt, output shape) for one audit run.
    The shape is the same object for every call; do not mutate it.
    """
    if not emails:
        raise ValueError("build_audit_request needs at least one email")
    return build_user_prompt(context, emails), AUDIT_OUTPUT_SHAPE
