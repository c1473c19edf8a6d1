"""
Identity generation for in-memory session objects.

IDs are a short prefix plus a uuid4 hex string. uuid4 draws from the OS
random source, so collisions within a session are negligible.
"""

from uuid import uuid4


def generate_id(prefix: str = "") -> str:
    """
    Generate a new opaque identity.

    Args:
        prefix: Optional prefix (e.g., "cq" -> "cq_3f2a...")

    Returns:
        Unique identifier string
    """
    token = uuid4().hex
    return f"{prefix}_{token}" if prefix else token
