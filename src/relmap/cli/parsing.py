"""Input parsing utilities for CLI commands."""

import json
from typing import Any


def parse_assignment(text: str) -> tuple[str, Any]:
    """Parse a ``key=value`` assignment.

    The value is decoded as JSON when possible so numbers, booleans and null
    keep their type; anything else is kept as a string.

    Examples:
        "clientId=2" → ("clientId", 2)
        "status=paid" → ("status", "paid")
        'tags=["a","b"]' → ("tags", ["a", "b"])

    Raises:
        ValueError: If the text has no '=' or an empty key
    """
    if "=" not in text:
        raise ValueError(f"Invalid assignment: '{text}'. Expected format: key=value")

    key, raw_value = text.split("=", 1)
    key = key.strip()
    if not key:
        raise ValueError(f"Invalid assignment: '{text}'. Key must not be empty")

    try:
        value = json.loads(raw_value)
    except json.JSONDecodeError:
        value = raw_value
    return key, value


def parse_assignments(texts: list[str] | None) -> dict[str, Any]:
    """Parse repeated ``--set key=value`` options into an updates dict.

    Later assignments to the same key win.
    """
    updates: dict[str, Any] = {}
    for text in texts or []:
        key, value = parse_assignment(text)
        updates[key] = value
    return updates


def parse_entity_id(raw: str) -> int | str:
    """Entity IDs are sent as integers when they are plain canonical digits.

    "007", "1_000" or " 5" stay strings so the request path is unchanged.
    """
    if raw.isascii() and raw.isdigit() and str(int(raw)) == raw:
        return int(raw)
    return raw
