"""Data model for the trueskill console mediation layer."""

from __future__ import annotations

import html
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, computed_field


class Action(str, Enum):
    """Operator intents. Values match the console form's ``action`` field."""

    UPDATE = "update"
    PUSH_RESULTS = "push"
    TEAM_LOOKUP = "team"
    PREDICT_ONE = "predict_one"
    PREDICT_BATCH = "predict_batch"

    @classmethod
    def lookup(cls, value: str) -> Action | None:
        """Return the matching action, or None for an unrecognized value."""
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class RequestContext:
    """One operator submission: the chosen action plus raw form fields.

    ``action`` is kept as the raw submitted string so an unrecognized value
    can reach the router and be dropped there.
    """

    action: str
    fields: dict[str, str] = field(default_factory=dict)
    base_url: str = ""

    def get(self, name: str) -> str:
        return self.fields.get(name, "")


class CallOutcome(BaseModel):
    """Normalized result of one HTTP round trip."""

    model_config = ConfigDict(frozen=True)

    http_status: int = 0
    parsed_body: Any = None
    raw_body: str | None = None
    transport_error: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def success(self) -> bool:
        # A 2xx with a body that does not decode as JSON is still a failure
        return (
            not self.transport_error
            and 200 <= self.http_status < 300
            and self.parsed_body is not None
        )


class DisplayRecord(BaseModel):
    """Rendered result for one submission, tagged with its action."""

    model_config = ConfigDict(frozen=True)

    action: Action
    style: Literal["ok", "err"]
    text: str

    def to_html(self) -> str:
        """Render the result box a host page places next to the action's form."""
        return f'<div class="log {self.style}">{self.text}</div>'


def escape(text: str) -> str:
    """Escape markup-significant characters for display.

    Single quotes come out as ``&#039;``.
    """
    return html.escape(text, quote=True).replace("&#x27;", "&#039;")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"not a JSON value: {name}")


def loads_strict(text: str) -> Any:
    """Decode JSON, rejecting the NaN and Infinity literals json.loads allows."""
    return json.loads(text, parse_constant=_reject_constant)


def pretty_json(value: Any) -> str:
    return json.dumps(value, indent=4)


@dataclass(frozen=True)
class StructuredValue:
    """A decoded JSON value."""

    value: Any

    def render(self) -> str:
        return pretty_json(self.value)


@dataclass(frozen=True)
class RawString:
    """Text that may or may not hold a JSON document."""

    text: str

    def render(self) -> str:
        try:
            decoded = loads_strict(self.text)
        except ValueError:
            return self.text
        return pretty_json(decoded)


Renderable = StructuredValue | RawString
