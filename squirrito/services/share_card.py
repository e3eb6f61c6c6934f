# FILE: squirrito/services/share_card.py
"""
SVG share card for a memory
"""
from datetime import datetime, timezone
from html import escape

from squirrito.models.memory import Memory

CARD_WIDTH = 1200
CARD_HEIGHT = 630


def format_created_at(created_at_ms: int) -> str:
    """Timestamp rendered in UTC so the card is the same on every host"""
    moment = datetime.fromtimestamp(created_at_ms / 1000, tz=timezone.utc)
    return moment.strftime("%Y-%m-%d %H:%M UTC")


def dot_position(lat: float, lng: float):
    """Map lat/lng onto the 240x120 plot centred in the globe badge"""
    return round(lng / 180 * 120, 2), round(-lat / 90 * 60, 2)


def render_share_svg(memory: Memory) -> str:
    """Render a fixed-layout 1200x630 card. Same memory in, same bytes out."""
    subtitle = escape(f"{memory.location_text} • {format_created_at(memory.created_at)}")
    joke = escape(memory.joke)
    dot_x, dot_y = dot_position(memory.lat, memory.lng)

    return f"""<?xml version="1.0" encoding="UTF-8"?>
<svg width="{CARD_WIDTH}" height="{CARD_HEIGHT}" viewBox="0 0 {CARD_WIDTH} {CARD_HEIGHT}" xmlns="http://www.w3.org/2000/svg">
  <defs>
    <linearGradient id="g" x1="0" y1="0" x2="1" y2="1">
      <stop offset="0%" stop-color="#0b1020"/><stop offset="100%" stop-color="#0a0f1c"/>
    </linearGradient>
    <filter id="s" x="-20%" y="-20%" width="140%" height="140%">
      <feGaussianBlur in="SourceGraphic" stdDeviation="20"/>
    </filter>
  </defs>
  <rect width="{CARD_WIDTH}" height="{CARD_HEIGHT}" fill="url(#g)"/>
  <circle cx="980" cy="140" r="120" fill="#2a61bf" filter="url(#s)" opacity="0.35"/>
  <text x="60" y="120" fill="#9fb7ff" font-family="system-ui" font-size="34" font-weight="600">Squirrito • Comedy Capsule</text>
  <text x="60" y="170" fill="#c9d6ff" font-family="system-ui" font-size="22" opacity="0.9">{subtitle}</text>
  <foreignObject x="60" y="220" width="820" height="300">
    <div xmlns="http://www.w3.org/1999/xhtml" style="font-family: system-ui; color:#e6f0ff; font-size: 36px; line-height: 1.25; font-weight: 700;">
      “{joke}”
    </div>
  </foreignObject>
  <g transform="translate(1010, 400)">
    <circle cx="0" cy="0" r="140" fill="#0f1a35" stroke="#2e3e7a" stroke-width="2"/>
    <circle cx="0" cy="0" r="2" fill="#62ffb4"/>
    <circle cx="{dot_x}" cy="{dot_y}" r="5" fill="#ff5a5f" opacity="0.9"/>
    <text x="-100" y="170" fill="#9fb7ff" font-family="system-ui" font-size="16">({memory.lat:.3f}, {memory.lng:.3f})</text>
  </g>
</svg>"""
