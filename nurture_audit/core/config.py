import logging
import os
from functools import lru_cache
from typing import Set

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _csv(raw: str) -> Set[str]:
    return {k.strip() for k in raw.split(",") if k.strip()}


class Settings(BaseModel):
    OPENAI_API_KEY: str = ""
    OPENAI_CHAT_MODEL: str = "gpt-4.1-mini"
    LLM_TIMEOUT_SECONDS: float = 120.0

    API_KEY_HEADER_NAME: str = "X-API-Key"
    VALID_API_KEYS: Set[str] = set()

    JWT_SECRET: str = ""
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "nurture_audit_api"
    JWT_AUDIENCE: str = "nurture_audit_clients"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    LOG_LEVEL: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            OPENAI_API_KEY=os.getenv("OPENAI_API_KEY", ""),
            OPENAI_CHAT_MODEL=os.getenv("OPENAI_CHAT_MODEL", "gpt-4.1-mini"),
            LLM_TIMEOUT_SECONDS=float(os.getenv("LLM_TIMEOUT_SECONDS", "120")),
            API_KEY_HEADER_NAME=os.getenv("API_KEY_HEADER_NAME", "X-API-Key"),
            # Comma-separated API keys in env (recommended for dev).
            VALID_API_KEYS=_csv(os.getenv("VALID_API_KEYS", "")),
            JWT_SECRET=os.getenv("JWT_SECRET", ""),
            JWT_ALGORITHM=os.getenv("JWT_ALGORITHM", "HS256"),
            JWT_ISSUER=os.getenv("JWT_ISSUER", "nurture_audit_api"),
            JWT_AUDIENCE=os.getenv("JWT_AUDIENCE", "nurture_audit_clients"),
            ACCESS_TOKEN_EXPIRE_MINUTES=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30")),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        )


@lru_cache
def get_settings() -> Settings:
    """
    Process-wide settings, read from the environment once.
    Used as a FastAPI dependency so tests can override it.
    """
    return Settings.from_env()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
