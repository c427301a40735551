import logging
from typing import Any, Dict, Optional

from openai import APIError, OpenAI

from nurture_audit.audit.prompts import SYSTEM_FLOW_STRATEGIST
from nurture_audit.core.errors import TransportFailureError

logger = logging.getLogger(__name__)


class AuditClient:
    """
    Sends one audit prompt to the chat model and returns its raw text.

    Credentials and model are passed in; nothing here reads the environment.
    A pre-built `client` can be injected (tests use a fake).
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        timeout: float = 120.0,
        client: Optional[Any] = None,
    ):
        if client is None and not api_key:
            raise ValueError("AuditClient needs an API key")
        self.model = model
        self.client = client or OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def complete(self, prompt: str, shape: Dict[str, Any]) -> Optional[str]:
        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_FLOW_STRATEGIST},
                    {"role": "user", "content": prompt},
                ],
                temperature=0,
                response_format={
                    "type": "json_schema",
                    "json_schema": {"name": "nurture_flow_audit", "schema": shape, "strict": True},
                },
            )
        except APIError as e:
            logger.warning("Chat completion failed: %s", e)
            raise TransportFailureError(f"Model call failed: {e}") from e

        return completion.choices[0].message.content
