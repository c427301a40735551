"""Shared fixtures: audit inputs and well-formed model output."""

from __future__ import annotations

import copy
import json
from types import SimpleNamespace
from typing import Any

import pytest

from nurture_audit.schemas.flow import AuditContext, EmailDraft


def email_entries(n: int) -> dict[str, list[dict[str, Any]]]:
    return {
        "emailReviews": [
            {
                "name": f"Email {i}",
                "role": "Reinforce the guide",
                "positioning": "Correct",
                "whatWorks": ["Clear subject"],
                "toImprove": ["Shorter intro"],
                "ctaStrength": {"assessment": "Strong", "reasoning": "Single CTA"},
                "articleReview": {"status": "Keep", "reasoning": "Relevant"},
            }
            for i in range(1, n + 1)
        ],
        "rewrite": [
            {
                "name": f"Email {i}",
                "subjects": ["Where your visitors get stuck"],
                "preheader": "Three friction signals to watch",
                "strategicPurpose": "Move from insight to trial",
                "copy": "Hi there,\n\nStart your trial.",
                "suggestedArticles": ["Rage clicks explained"],
            }
            for i in range(1, n + 1)
        ],
        "hubspotLayout": [
            {
                "emailName": f"Email {i}",
                "blocks": [
                    {"label": "Header", "content": "Logo"},
                    {"label": "CTA", "content": "Start trial"},
                ],
            }
            for i in range(1, n + 1)
        ],
    }


def audit_document(n: int = 1) -> dict[str, Any]:
    return {
        "dashboard": {
            "verdict": "Builds intent, but the CTA arrives late.",
            "winsRisks": [
                {"type": "win", "text": "Strong opener"},
                {"type": "risk", "text": "Soft CTA"},
            ],
            "score": 7,
            "fixFirst": "Move the trial CTA into email 2",
        },
        "flowHealth": {
            "logicalStructure": "Partially",
            "momentumCheck": "Dips after email 2",
            "ctaProgression": "Flat",
            "articleMix": "Too many top-of-funnel reads",
            "improvements": ["Add a case study", "Tighten subjects"],
        },
        **email_entries(n),
    }


class FakeCompletions:
    """Stands in for client.chat.completions; records every call."""

    def __init__(self, content: str | None = None, error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def create(self, **kwargs: Any) -> SimpleNamespace:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_openai(completions: FakeCompletions) -> SimpleNamespace:
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


@pytest.fixture
def document() -> dict[str, Any]:
    return copy.deepcopy(audit_document(1))


@pytest.fixture
def raw_document(document: dict[str, Any]) -> str:
    return json.dumps(document)


@pytest.fixture
def context() -> AuditContext:
    return AuditContext(
        industry="SaaS",
        personas=["Growth Manager"],
        goal="trial",
        language="EN",
    )


@pytest.fixture
def drafts() -> list[EmailDraft]:
    return [
        EmailDraft(id="1", content="Thanks for downloading the checklist."),
        EmailDraft(id="2", content="Here is what session replay shows."),
        EmailDraft(id="3", content="Start your free trial today."),
    ]
