# FILE: squirrito/providers/registry.py
"""
Model registry: ordered fallback across candidate models
"""
import logging
import time
from typing import Any, List, Optional

from squirrito.config import get_settings
from squirrito.providers.workers_ai import WorkersAIProvider

logger = logging.getLogger(__name__)


class InferenceError(RuntimeError):
    """Every candidate model failed. `diagnostics` keeps one entry per model, in order."""

    def __init__(self, models: List[str], diagnostics: List[str]):
        self.models = models
        self.diagnostics = diagnostics
        super().__init__(
            f"All models failed. Tried: {', '.join(models)}. "
            f"Details: {' | '.join(diagnostics)}"
        )


class ModelRegistry:
    """
    Candidate models tried in a fixed order.

    Every call to generate() starts again from the first candidate; nothing
    about earlier failures is remembered between calls.
    """

    def __init__(self, providers: Optional[List[Any]] = None):
        self.providers: List[Any] = list(providers) if providers is not None else []
        if providers is None:
            self._initialize_providers()

    def _initialize_providers(self):
        """Build one provider per configured candidate model"""
        settings = get_settings()
        if not settings.inference_configured:
            logger.warning(
                "Workers AI credentials not configured; every generate() call will fail"
            )
            return

        for model in settings.inference_models:
            self.providers.append(
                WorkersAIProvider(
                    account_id=settings.cloudflare_account_id,
                    api_token=settings.cloudflare_api_token,
                    model=model,
                    base_url=settings.workers_ai_base_url,
                    timeout=settings.inference_timeout_seconds
                )
            )

        logger.info(f"Initialized candidate models: {self.models}")

    @property
    def models(self) -> List[str]:
        return [p.model for p in self.providers]

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.9,
        max_tokens: int = 160,
        correlation_id: Optional[str] = None
    ) -> str:
        """
        Return the first non-empty (trimmed) response from the candidates.

        Raises:
            InferenceError: when no candidate produced text
        """
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        diagnostics: List[str] = []

        for provider in self.providers:
            started = time.monotonic()
            try:
                logger.info(f"[{correlation_id}] Trying model: {provider.model}")
                result = provider.generate(
                    messages=messages,
                    temperature=temperature,
                    max_tokens=max_tokens
                )
            except Exception as e:
                diagnostics.append(f"{provider.model} → {type(e).__name__}: {e}")
                logger.warning(f"[{correlation_id}] Model {provider.model} failed: {e}")
                continue

            text = (result.get("text") or "").strip()
            duration_ms = int((time.monotonic() - started) * 1000)
            if text:
                logger.info(
                    f"[{correlation_id}] Model {provider.model} answered in {duration_ms}ms"
                )
                return text

            diagnostics.append(f"{provider.model} → empty response")
            logger.warning(f"[{correlation_id}] Model {provider.model} returned empty response")

        if not self.providers:
            diagnostics.append("no candidate models configured")

        raise InferenceError(self.models, diagnostics)


_registry: Optional[ModelRegistry] = None


def get_model_registry() -> ModelRegistry:
    """Get or create global model registry"""
    global _registry
    if _registry is None:
        _registry = ModelRegistry()
    return _registry
