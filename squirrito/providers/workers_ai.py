# FILE: squirrito/providers/workers_ai.py
"""
Cloudflare Workers AI provider adapter
"""
import logging
import httpx
from typing import Dict, Any, List

logger = logging.getLogger(__name__)


class WorkersAIProvider:
    """One Workers AI text-generation model reached over the REST API"""

    def __init__(
        self,
        account_id: str,
        api_token: str,
        model: str,
        base_url: str = "https://api.cloudflare.com/client/v4",
        timeout: float = 8.0
    ):
        self.account_id = account_id
        self.api_token = api_token
        self.model = model
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        logger.info(f"Workers AI provider: model={model}")

    def generate(
        self,
        messages: List[Dict[str, str]],
        temperature: float,
        max_tokens: int
    ) -> Dict[str, Any]:
        """Run a chat completion. Timeouts and HTTP errors propagate."""
        url = f"{self.base_url}/accounts/{self.account_id}/ai/run/{self.model}"

        headers = {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json"
        }

        payload = {
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature
        }

        response = httpx.post(url, json=payload, headers=headers, timeout=self.timeout)
        response.raise_for_status()

        data = response.json()
        if not data.get("success", True):
            errors = "; ".join(
                e.get("message", str(e)) if isinstance(e, dict) else str(e)
                for e in data.get("errors") or []
            )
            raise RuntimeError(errors or "request was not successful")

        result = data.get("result") or {}
        text = result.get("response")

        return {
            "text": text if isinstance(text, str) else "",
            "model": self.model,
            "usage": result.get("usage", {})
        }
