# FILE: squirrito/services/startup_verify.py
"""
Startup verification
"""
import logging
from pathlib import Path
from typing import Dict, Any

from squirrito.config import get_settings
from squirrito.providers.registry import get_model_registry

logger = logging.getLogger(__name__)


async def verify_startup() -> Dict[str, Any]:
    """Verify system startup requirements"""
    logger.info("Running startup verification")
    settings = get_settings()

    memory_dir = Path(settings.memory_dir)
    memory_dir.mkdir(parents=True, exist_ok=True)
    probe = memory_dir / ".write_probe"
    try:
        probe.write_text("ok", encoding="utf-8")
        probe.unlink()
        storage_writable = True
    except OSError as e:
        logger.error(f"Memory directory not writable: {memory_dir}: {e}")
        storage_writable = False

    registry = get_model_registry()
    inference_active = len(registry.providers) > 0
    if not inference_active:
        if settings.fallback_joke_enabled:
            logger.warning("No candidate models available; /api/joke will serve the fallback joke")
        else:
            logger.warning("No candidate models available; /api/joke will answer 503")

    logger.info(
        f"Startup verification done: models={registry.models} storage_writable={storage_writable}"
    )

    return {
        "inference_active": inference_active,
        "models": registry.models,
        "storage_writable": storage_writable,
        "memory_dir": str(memory_dir)
    }
