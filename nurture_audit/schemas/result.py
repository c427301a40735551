"""
Typed model of the audit result returned by the language model.

Field names are snake_case in Python and camelCase on the wire. Validation is
strict on primitive kinds: the model output is not a type-checked boundary, so
"7" is not a score and a bare string is not a list.
"""
import logging
from typing import List, Literal, Sequence, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

SCORE_MIN = 1.0
SCORE_MAX = 10.0

WinRiskType = Literal["win", "risk"]
LogicalStructure = Literal["Yes", "Partially", "No"]
Positioning = Literal["Correct", "Move earlier", "Move later"]
CtaAssessment = Literal["Strong", "Needs improvement"]
ArticleStatus = Literal["Keep", "Replace", "Optional"]


def canonical_choice(value, choices: Sequence[str]):
    """
    Maps 'partially ' -> 'Partially'. Unknown values are returned untouched so
    the Literal check rejects them.
    """
    if not isinstance(value, str):
        return value
    wanted = value.strip().casefold()
    for choice in choices:
        if choice.casefold() == wanted:
            return choice
    return value


class ResultModel(BaseModel):
    model_config = ConfigDict(
        strict=True,
        allow_inf_nan=False,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class WinRisk(ResultModel):
    type: WinRiskType
    text: str

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v):
        return canonical_choice(v, get_args(WinRiskType))


class Dashboard(ResultModel):
    verdict: str
    wins_risks: List[WinRisk]
    score: float
    fix_first: str

    @field_validator("score")
    @classmethod
    def _clamp_score(cls, v: float) -> float:
        clamped = min(max(v, SCORE_MIN), SCORE_MAX)
        if clamped != v:
            logger.warning("Clamped out-of-range dashboard score %s to %s", v, clamped)
        return clamped


class FlowHealth(ResultModel):
    logical_structure: LogicalStructure
    momentum_check: str
    cta_progression: str
    article_mix: str
    improvements: List[str]

    @field_validator("logical_structure", mode="before")
    @classmethod
    def _normalize_structure(cls, v):
        return canonical_choice(v, get_args(LogicalStructure))


class CtaStrength(ResultModel):
    assessment: CtaAssessment
    reasoning: str

    @field_validator("assessment", mode="before")
    @classmethod
    def _normalize_assessment(cls, v):
        return canonical_choice(v, get_args(CtaAssessment))


class ArticleReview(ResultModel):
    status: ArticleStatus
    reasoning: str

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, v):
        return canonical_choice(v, get_args(ArticleStatus))


class EmailReview(ResultModel):
    name: str
    role: str
    positioning: Positioning
    what_works: List[str]
    to_improve: List[str]
    cta_strength: CtaStrength
    article_review: ArticleReview

    @field_validator("positioning", mode="before")
    @classmethod
    def _normalize_positioning(cls, v):
        return canonical_choice(v, get_args(Positioning))


class RewrittenEmail(ResultModel):
    name: str
    subjects: List[str]
    preheader: str
    strategic_purpose: str
    # "copy" would shadow BaseModel.copy
    copy_text: str = Field(alias="copy")
    suggested_articles: List[str]


class LayoutBlock(ResultModel):
    label: str
    content: str


class HubspotLayout(ResultModel):
    email_name: str
    blocks: List[LayoutBlock]


class AuditResult(ResultModel):
    dashboard: Dashboard
    flow_health: FlowHealth
    email_reviews: List[EmailReview]
    rewrite: List[RewrittenEmail]
    hubspot_layout: List[HubspotLayout]
