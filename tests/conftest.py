# FILE: tests/conftest.py

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from fastapi.testclient import TestClient

import squirrito.config as config
import squirrito.providers.registry as registry_module
import squirrito.services.geocode as geocode_module
import squirrito.services.memory_store as memory_store_module
from squirrito.models.joke import GeocodeResult, PlaceInfo
from squirrito.providers.registry import ModelRegistry, get_model_registry
from squirrito.services.geocode import get_geocoder
from squirrito.services.memory_store import MemoryStore, get_global_memory_store


class FakeProvider:
    """Stands in for one candidate model; replays scripted replies"""

    def __init__(self, model, *replies):
        self.model = model
        self.replies = list(replies)
        self.calls = []

    def generate(self, messages, temperature, max_tokens):
        self.calls.append(messages)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        return {"text": reply, "model": self.model, "usage": {}}


class FakeGeocoder:
    """Geocoder that never touches the network"""

    def __init__(self, place=None, hit=None):
        self.place = place
        self.hit = hit
        self.enrich_calls = []
        self.search_calls = []

    def enrich(self, lat, lng):
        self.enrich_calls.append((lat, lng))
        return self.place

    def search(self, query):
        self.search_calls.append(query)
        return self.hit


@pytest.fixture
def settings(tmp_path, monkeypatch):
    """Fresh settings whose memory store lives in tmp_path"""
    monkeypatch.setenv("MEMORY_DIR", str(tmp_path / "memory"))
    for name in ("CLOUDFLARE_ACCOUNT_ID", "CLOUDFLARE_API_TOKEN", "INFERENCE_MODELS",
                 "PUNCH_UP_ENABLED", "FALLBACK_JOKE_ENABLED"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(registry_module, "_registry", None)
    monkeypatch.setattr(geocode_module, "_geocoder", None)
    monkeypatch.setattr(memory_store_module, "_stores", {})

    fresh = config.reload_settings()
    yield fresh
    config._settings = None


@pytest.fixture
def make_provider():
    return FakeProvider


@pytest.fixture
def provider():
    return FakeProvider("@cf/test/primary", "Why did the Eiffel Tower blush? It saw Paris in its undies.")


@pytest.fixture
def registry(provider):
    return ModelRegistry(providers=[provider])


@pytest.fixture
def geocoder():
    return FakeGeocoder(
        place=PlaceInfo(name="Champ de Mars", city="Paris", country="France"),
        hit=GeocodeResult(lat=48.8584, lng=2.2945)
    )


@pytest.fixture
def store(settings):
    return MemoryStore(name="GLOBAL", storage_dir=settings.memory_dir)


@pytest.fixture
def client(settings, registry, geocoder, store):
    """TestClient with inference, geocoding and storage swapped for fakes"""
    from squirrito.app import app

    app.dependency_overrides[get_model_registry] = lambda: registry
    app.dependency_overrides[get_geocoder] = lambda: geocoder
    app.dependency_overrides[get_global_memory_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_memory_fields():
    return {
        "locationText": "Eiffel Tower",
        "lat": 48.8584,
        "lng": 2.2945,
        "joke": "The tower is 330m tall and still can't see over the tourist queue."
    }
