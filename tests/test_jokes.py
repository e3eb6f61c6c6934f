# FILE: tests/test_jokes.py
"""Joke orchestration: context, prompts, punch-up and degraded mode"""
import pytest

from squirrito.models.joke import JokeRequest, PlaceInfo
from squirrito.providers.registry import ModelRegistry
from squirrito.services.jokes import (
    EDITOR_PROMPT,
    SYSTEM_PROMPT,
    JokeService,
    JokeUnavailable,
    build_context,
    build_user_prompt,
)


def test_build_context_keeps_only_present_details():
    request = JokeRequest(locationText="Cafe", surroundings="espresso machine", todayPlan="")
    place = PlaceInfo(name=None, city="Rome", country="Italy")

    assert build_context(request, place) == [
        "City: Rome",
        "Country: Italy",
        "Sees: espresso machine",
    ]


def test_build_context_without_place():
    request = JokeRequest(locationText="Gym", todayPlan="leg day")
    assert build_context(request, None) == ["Doing: leg day"]


def test_user_prompt_embeds_scene_and_bullets():
    prompt = build_user_prompt("Eiffel Tower", ["City: Paris", "Sees: crowds"])

    assert prompt.startswith('Scene label: "Eiffel Tower"\n')
    assert "- City: Paris\n- Sees: crowds" in prompt
    assert prompt.endswith("Make one light, playful joke.")


def test_user_prompt_without_context_has_no_context_block():
    assert "Context" not in build_user_prompt("Beach", [])


def test_generate_punches_up_first_draft(settings, make_provider, geocoder):
    provider = make_provider("m", "first draft", "punchier joke")
    service = JokeService(ModelRegistry(providers=[provider]), geocoder)

    result = service.generate(JokeRequest(locationText="Eiffel Tower", lat=48.8584, lng=2.2945))

    assert result.joke == "punchier joke"
    assert result.fallback is False
    system, user = provider.calls[0]
    assert system["content"] == SYSTEM_PROMPT
    assert "City: Paris" in user["content"]
    assert "Nearby: Champ de Mars" in user["content"]
    assert provider.calls[1] == [
        {"role": "system", "content": EDITOR_PROMPT},
        {"role": "user", "content": "first draft"},
    ]
    assert geocoder.enrich_calls == [(48.8584, 2.2945)]


def test_failed_punch_up_keeps_first_draft(settings, make_provider, geocoder):
    provider = make_provider("m", "first draft", RuntimeError("down"))
    service = JokeService(ModelRegistry(providers=[provider]), geocoder)

    assert service.generate(JokeRequest(locationText="Park")).joke == "first draft"


def test_punch_up_can_be_switched_off(settings, make_provider, geocoder, monkeypatch):
    monkeypatch.setattr(settings, "punch_up_enabled", False)
    provider = make_provider("m", "only draft")
    service = JokeService(ModelRegistry(providers=[provider]), geocoder)

    assert service.generate(JokeRequest(locationText="Park")).joke == "only draft"
    assert len(provider.calls) == 1


def test_total_failure_serves_fallback_joke(settings, make_provider, geocoder):
    provider = make_provider("m", RuntimeError("down"))
    service = JokeService(ModelRegistry(providers=[provider]), geocoder)

    result = service.generate(JokeRequest(locationText="Park"))

    assert result.fallback is True
    assert result.joke == settings.fallback_joke


def test_total_failure_raises_when_fallback_disabled(settings, make_provider, geocoder, monkeypatch):
    monkeypatch.setattr(settings, "fallback_joke_enabled", False)
    provider = make_provider("m", RuntimeError("down"))
    service = JokeService(ModelRegistry(providers=[provider]), geocoder)

    with pytest.raises(JokeUnavailable, match="m"):
        service.generate(JokeRequest(locationText="Park"))


def test_non_numeric_coordinates_become_absent():
    request = JokeRequest(locationText="Park", lat="12.5", lng=True)
    assert request.lat is None
    assert request.lng is None
