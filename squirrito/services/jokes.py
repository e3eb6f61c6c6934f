# FILE: squirrito/services/jokes.py
"""
Joke generation for a described scene

Stateless: enrich the scene with a place hint, ask the model registry for a
joke, optionally punch it up. Nothing here touches the memory store.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import List, Optional

from squirrito.config import get_settings
from squirrito.models.joke import JokeRequest, PlaceInfo
from squirrito.providers.registry import InferenceError, ModelRegistry
from squirrito.services.geocode import Geocoder

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "You are Squirrito, a hyperactive, nut-hoarding comedy squirrel. "
    "Make ONE funny, PG-13 joke based on the user's immediate scene, landmarks, and situation. "
    "Don't include anything related to squirrels. "
    "Use playful exaggeration, puns, and silly imagery. "
    "Max 2 sentences. Avoid offensive stereotypes, politics, or tragedies. "
    "Do not guess which country the user is in and do not mention the weather. "
    "Casual tone allowed (e.g. 'Let's be real...', fun comparisons)."
)

EDITOR_PROMPT = (
    "You are a comedy editor. Rewrite the joke to be sillier, pun-filled, and more surprising, "
    "without being mean or offensive. Keep it 1-2 sentences. Reply with the joke only."
)


class JokeUnavailable(RuntimeError):
    """No model produced a joke and the canned fallback is switched off"""


@dataclass(frozen=True)
class JokeResult:
    joke: str
    fallback: bool = False


def build_context(request: JokeRequest, place: Optional[PlaceInfo]) -> List[str]:
    """Context lines for whichever details are present"""
    bits = []
    if place is not None:
        if place.name:
            bits.append(f"Nearby: {place.name}")
        if place.city:
            bits.append(f"City: {place.city}")
        if place.country:
            bits.append(f"Country: {place.country}")
    if request.surroundings:
        bits.append(f"Sees: {request.surroundings}")
    if request.today_plan:
        bits.append(f"Doing: {request.today_plan}")
    return bits


def build_user_prompt(location_text: str, context: List[str]) -> str:
    prompt = f'Scene label: "{location_text}"\n'
    if context:
        prompt += "Context:\n" + "\n".join(f"- {bit}" for bit in context) + "\n"
    return prompt + "Make one light, playful joke."


class JokeService:
    """Orchestrates enrichment, prompting and the model registry"""

    def __init__(self, registry: ModelRegistry, geocoder: Geocoder):
        self.registry = registry
        self.geocoder = geocoder

    def _punch_up(self, draft: str, correlation_id: str) -> str:
        settings = get_settings()
        try:
            punched = self.registry.generate(
                EDITOR_PROMPT,
                draft,
                temperature=settings.joke_temperature,
                max_tokens=settings.joke_max_tokens,
                correlation_id=correlation_id
            )
        except InferenceError as e:
            logger.info(f"[{correlation_id}] Punch-up failed, keeping first draft: {e}")
            return draft
        return punched or draft

    def generate(self, request: JokeRequest) -> JokeResult:
        """
        Produce one joke for the scene.

        When every model fails, returns the canned joke flagged as a
        fallback if FALLBACK_JOKE_ENABLED is on, otherwise raises
        JokeUnavailable.
        """
        settings = get_settings()
        correlation_id = uuid.uuid4().hex[:8]

        place = self.geocoder.enrich(request.lat, request.lng)
        context = build_context(request, place)
        user_prompt = build_user_prompt(request.location_text, context)

        try:
            draft = self.registry.generate(
                SYSTEM_PROMPT,
                user_prompt,
                temperature=settings.joke_temperature,
                max_tokens=settings.joke_max_tokens,
                correlation_id=correlation_id
            )
        except InferenceError as e:
            if not settings.fallback_joke_enabled:
                logger.error(f"[{correlation_id}] Joke generation failed: {e}")
                raise JokeUnavailable(str(e)) from e
            logger.warning(f"[{correlation_id}] Joke generation failed, serving fallback joke: {e}")
            return JokeResult(joke=settings.fallback_joke, fallback=True)

        if settings.punch_up_enabled:
            draft = self._punch_up(draft, correlation_id)
        return JokeResult(joke=draft)
