"""Operator input parsers.

Each parser turns raw form text into the request fragment its endpoint
expects, or raises ValidationError with a message for the operator.
"""

from __future__ import annotations

import re
from typing import Any

from console.errors import ValidationError
from console.models import loads_strict

EVENT_KEY_RE = re.compile(r"^\d{4}[a-z0-9]+$", re.IGNORECASE | re.ASCII)
ALLIANCE_SPLIT_RE = re.compile(r"[,\s]+")

INVALID_JSON_MESSAGE = "Invalid JSON array."


def parse_event_key(text: str) -> dict[str, str]:
    """Validate an event key such as ``2025nyrr``.

    Returns:
        The ``/update`` request body.

    Raises:
        ValidationError: If the key is empty or lacks the leading year.
    """
    event_key = text.strip()
    if not event_key:
        raise ValidationError("Please enter an event key (e.g., 2025nyrr).")
    if not EVENT_KEY_RE.match(event_key):
        raise ValidationError("Invalid event key. Use full key with year, e.g., 2025nyrr.")
    return {"event_key": event_key}


def parse_json_container(text: str) -> list[Any] | dict[str, Any]:
    """Decode a pasted JSON payload, which must be an array or object.

    The decoded value is passed through untouched; the remote API owns
    schema validation.
    """
    if not text:
        raise ValidationError(INVALID_JSON_MESSAGE)
    try:
        decoded = loads_strict(text)
    except ValueError:
        raise ValidationError(INVALID_JSON_MESSAGE) from None
    if not isinstance(decoded, (list, dict)):
        raise ValidationError(INVALID_JSON_MESSAGE)
    return decoded


def parse_team_key(text: str) -> str:
    team_key = text.strip()
    if not team_key:
        raise ValidationError("Provide a team key like frc254.")
    return team_key


def split_alliance(text: str) -> list[str]:
    """Split ``"frc254, frc1678 frc118"`` into ordered team keys.

    Commas and whitespace in any mix separate tokens. Order and duplicates
    are kept.
    """
    tokens = (token.strip() for token in ALLIANCE_SPLIT_RE.split(text))
    return [token for token in tokens if token]


def parse_alliances(teams1: str, teams2: str) -> dict[str, list[str]]:
    red = split_alliance(teams1)
    blue = split_alliance(teams2)
    if not red or not blue:
        raise ValidationError("Enter both alliances.")
    return {"teams1": red, "teams2": blue}
