"""Identifier generation and shape checks for stored movies."""

import re
import secrets
import time

# Same shape as a MongoDB ObjectId: 12 bytes rendered as hex.
OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


def generate_object_id() -> str:
    """
    Generate a new 24-character hex identifier.

    The first 8 characters encode the creation time in seconds so ids
    sort roughly by insertion order; the remaining 16 are random.
    """
    return f"{int(time.time()):08x}{secrets.token_hex(8)}"


def is_object_id(value: object) -> bool:
    return isinstance(value, str) and OBJECT_ID_PATTERN.fullmatch(value) is not None
