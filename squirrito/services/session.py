# FILE: squirrito/services/session.py
"""
Anonymous session identifiers
"""
import uuid
from typing import Optional


def generate_session_id() -> str:
    """Generate unique session ID"""
    return str(uuid.uuid4())


def resolve_session_id(cookie_value: Optional[str]) -> str:
    """Reuse the session ID carried by the client, or mint a new one"""
    if cookie_value and cookie_value.strip():
        return cookie_value.strip()
    return generate_session_id()
