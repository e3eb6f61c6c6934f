# FILE: tests/test_share_card.py
"""SVG share card rendering"""
from squirrito.models.memory import Memory
from squirrito.services.share_card import dot_position, format_created_at, render_share_svg


def _memory(**overrides):
    fields = dict(
        id="3f0c1a8e-0000-4000-8000-000000000001",
        session_id="s1",
        location_text="Eiffel Tower",
        lat=48.8584,
        lng=2.2945,
        joke="Why so tall? To see over the queue.",
        created_at=1700000000000,
    )
    fields.update(overrides)
    return Memory(**fields)


def test_rendering_is_deterministic():
    assert render_share_svg(_memory()) == render_share_svg(_memory())


def test_card_contains_joke_location_time_and_coordinates():
    svg = render_share_svg(_memory())

    assert svg.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert 'width="1200" height="630"' in svg
    assert "Why so tall? To see over the queue." in svg
    assert "Eiffel Tower • 2023-11-14 22:13 UTC" in svg
    assert "(48.858, 2.295)" in svg


def test_user_text_is_escaped():
    svg = render_share_svg(_memory(joke='<script>alert("x")</script> & more', location_text="A<B"))

    assert "<script>" not in svg
    assert "&lt;script&gt;alert(&quot;x&quot;)&lt;/script&gt; &amp; more" in svg
    assert "A&lt;B" in svg


def test_dot_position_scales_coordinates():
    assert dot_position(0.0, 0.0) == (0.0, 0.0)
    assert dot_position(90.0, 180.0) == (120.0, -60.0)
    assert dot_position(-45.0, -90.0) == (-60.0, 30.0)


def test_format_created_at_is_utc():
    assert format_created_at(0) == "1970-01-01 00:00 UTC"
