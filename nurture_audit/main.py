# nurture_audit/main.py

import logging
from typing import Any, Dict, Literal

from fastapi import Depends, FastAPI, HTTPException

from nurture_audit.audit.client import AuditClient
from nurture_audit.audit.service import run_audit, select_view
from nurture_audit.core.config import Settings, configure_logging, get_settings
from nurture_audit.core.errors import (
    AuditError,
    InvalidInputError,
    TransportFailureError,
)
from nurture_audit.core.security import api_key_auth, create_access_token, jwt_auth
from nurture_audit.schemas.flow import AuditRequest
from nurture_audit.schemas.result import AuditResult

logger = logging.getLogger(__name__)

app = FastAPI(title="Nurture Flow Auditor", version="1.0.0")

client: AuditClient | None = None

AUDIT_FAILED = "Strategic audit failed. Please try again."
SERVICE_UNREACHABLE = "Audit service unreachable. Please try again later."


@app.on_event("startup")
def startup():
    """
    Configures logging and builds the model client from settings.
    """
    global client

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    if not settings.OPENAI_API_KEY:
        raise RuntimeError("OPENAI_API_KEY is not set. Set it in environment or .env")

    client = AuditClient(
        api_key=settings.OPENAI_API_KEY,
        model=settings.OPENAI_CHAT_MODEL,
        timeout=settings.LLM_TIMEOUT_SECONDS,
    )


def get_audit_client() -> AuditClient:
    if client is None:
        raise HTTPException(status_code=500, detail="Model client not initialized")
    return client


def _to_http_error(e: AuditError) -> HTTPException:
    if isinstance(e, InvalidInputError):
        return HTTPException(
            status_code=422,
            detail={"code": e.code, "message": e.message, "issues": e.issues},
        )
    if isinstance(e, TransportFailureError):
        return HTTPException(status_code=503, detail={"code": e.code, "message": SERVICE_UNREACHABLE})
    # Malformed and schema-violating output look the same to the user.
    return HTTPException(status_code=502, detail={"code": e.code, "message": AUDIT_FAILED})


def _audit(request: AuditRequest, audit_client: AuditClient) -> AuditResult:
    try:
        return run_audit(request, audit_client)
    except AuditError as e:
        raise _to_http_error(e) from e


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/v1/auth/token")
def issue_token(
    api_key: str = Depends(api_key_auth),
    settings: Settings = Depends(get_settings),
):
    """
    Exchange API Key (X-API-Key) for a short-lived JWT access token.

    Response:
      { "access_token": "...", "token_type": "bearer", "expires_in": 1800 }
    """
    token = create_access_token(subject=api_key, settings=settings)
    return {
        "access_token": token,
        "token_type": "bearer",
        "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    }


@app.post("/v1/audits", response_model=AuditResult)
def audit_flow(
    request: AuditRequest,
    _auth=Depends(jwt_auth),
    audit_client: AuditClient = Depends(get_audit_client),
):
    """
    Audits a nurturing email flow and returns all five result pages.
    This is the route a UI should call: one model call feeds every page.
    1) Draft checks (every email must have content)
    2) Prompt + JSON schema for the chat model
    3) Model output parsed and validated into AuditResult
    """
    return _audit(request, audit_client)


@app.post("/v1/audits/{view}")
def audit_flow_view(
    view: Literal["dashboard", "health", "review", "rewrite", "hubspot"],
    request: AuditRequest,
    _auth=Depends(jwt_auth),
    audit_client: AuditClient = Depends(get_audit_client),
):
    """
    Convenience wrapper returning a single result page.
    Each call runs a full audit (one model call), so clients that show
    more than one page should call /v1/audits once instead.
    """
    result = _audit(request, audit_client)
    body: Dict[str, Any] = {"view": view, "data": select_view(result, view)}
    return body
