from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Literal

Industry = Literal["SaaS", "Ecommerce", "Finance", "Automotive", "Telecom", "Other"]
FlowGoal = Literal["educational", "trial", "demo", "other"]
Language = Literal["EN", "PT-BR"]

DEFAULT_PERSONAS = ["Head of Growth", "Marketing Manager"]


def split_personas(raw: str) -> List[str]:
    """'Head of Growth, Marketing Manager' -> ['Head of Growth', 'Marketing Manager']"""
    return [p.strip() for p in raw.split(",") if p.strip()]


class AuditContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    industry: Industry = "SaaS"
    personas: List[str] = Field(default_factory=lambda: list(DEFAULT_PERSONAS), min_length=1)
    goal: FlowGoal = "trial"
    language: Language = "EN"

    @field_validator("personas", mode="before")
    @classmethod
    def _clean_personas(cls, v):
        # The form sends personas as one comma-separated field.
        if isinstance(v, str):
            return split_personas(v)
        if isinstance(v, (list, tuple)):
            # Non-strings are left for the List[str] check to reject.
            stripped = [p.strip() if isinstance(p, str) else p for p in v]
            return [p for p in stripped if p != ""]
        return v


class EmailDraft(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    content: str = ""


class AuditRequest(BaseModel):
    context: AuditContext = Field(default_factory=AuditContext)
    emails: List[EmailDraft] = Field(min_length=1)
