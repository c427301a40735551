# ruff: noqa: S101
"""Tests for the pre-flight draft checks and request parsing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from nurture_audit.core.errors import InvalidInputError
from nurture_audit.rules.draft_rules import ensure_submittable, evaluate_drafts
from nurture_audit.schemas.flow import AuditContext, AuditRequest, EmailDraft


def test_filled_drafts_have_no_issues(drafts: list[EmailDraft]) -> None:
    assert evaluate_drafts(drafts) == []
    ensure_submittable(drafts)


def test_blank_drafts_are_reported_by_position() -> None:
    drafts = [
        EmailDraft(id="a", content="Hello"),
        EmailDraft(id="b", content="   \n\t"),
        EmailDraft(id="c"),
    ]
    issues = evaluate_drafts(drafts)
    assert [i["code"] for i in issues] == ["EMPTY_EMAIL", "EMPTY_EMAIL"]
    assert [(i["email_id"], i["position"]) for i in issues] == [("b", 2), ("c", 3)]


def test_ensure_submittable_raises_invalid_input() -> None:
    with pytest.raises(InvalidInputError) as exc:
        ensure_submittable([EmailDraft(id="1", content="")])
    assert exc.value.code == "invalid_input"
    assert exc.value.issues[0]["position"] == 1


def test_no_drafts_is_invalid() -> None:
    with pytest.raises(InvalidInputError) as exc:
        ensure_submittable([])
    assert exc.value.issues[0]["code"] == "NO_EMAILS"


def test_personas_accept_comma_string() -> None:
    ctx = AuditContext(personas="Head of Growth, , Marketing Manager,")
    assert ctx.personas == ["Head of Growth", "Marketing Manager"]


def test_persona_list_entries_are_trimmed() -> None:
    ctx = AuditContext(personas=[" ", " Growth "])
    assert ctx.personas == ["Growth"]


@pytest.mark.parametrize("personas", ["", " , ,", [], ["  ", ""]])
def test_personas_must_not_be_empty(personas: str | list[str]) -> None:
    with pytest.raises(ValidationError):
        AuditContext(personas=personas)


def test_personas_default_to_form_defaults() -> None:
    assert AuditContext().personas == ["Head of Growth", "Marketing Manager"]


def test_context_is_frozen(context: AuditContext) -> None:
    with pytest.raises(ValidationError):
        context.goal = "demo"


def test_unknown_industry_is_rejected() -> None:
    with pytest.raises(ValidationError):
        AuditContext(industry="Retail")


def test_request_needs_one_email() -> None:
    with pytest.raises(ValidationError):
        AuditRequest(emails=[])
