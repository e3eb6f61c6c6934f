# FILE: tests/test_clear_memories.py
"""Maintenance tool that wipes a store"""
from squirrito.services.memory_store import get_memory_store
from squirrito.tools.clear_memories import main


def _seed(name=None):
    store = get_memory_store(name)
    store.save(session_id="s", location_text="Here", lat=1.0, lng=1.0, joke="j")
    return store


def test_refuses_without_confirmation(settings, capsys):
    store = _seed()
    assert main([]) == 1
    assert len(store.list()) == 1
    assert "without --yes" in capsys.readouterr().out


def test_clears_global_store(settings, capsys):
    store = _seed()
    assert main(["--yes"]) == 0
    assert store.list() == []
    assert "1 memories" in capsys.readouterr().out


def test_clears_only_the_named_store(settings):
    other = _seed("OTHER")
    main_store = _seed()

    assert main(["--name", "OTHER", "--yes"]) == 0
    assert other.list() == []
    assert len(main_store.list()) == 1


def test_clears_unreadable_store(settings):
    store = get_memory_store()
    store.path.parent.mkdir(parents=True, exist_ok=True)
    store.path.write_text("garbage", encoding="utf-8")

    assert main(["--yes"]) == 0
    assert not store.path.exists()
