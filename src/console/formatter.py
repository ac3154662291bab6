"""Render local errors and call outcomes into DisplayRecords."""

from __future__ import annotations

from typing import Any

from console.models import (
    Action,
    CallOutcome,
    DisplayRecord,
    RawString,
    Renderable,
    StructuredValue,
    escape,
)


def as_renderable(value: Any) -> Renderable:
    """Tag a body for rendering: text stays raw, decoded JSON is structured."""
    if isinstance(value, str):
        return RawString(value)
    return StructuredValue(value)


def pretty(value: Any) -> str:
    return as_renderable(value).render()


def outcome_body(outcome: CallOutcome) -> Any:
    if outcome.parsed_body is not None:
        return outcome.parsed_body
    if outcome.raw_body is not None:
        return outcome.raw_body
    return ""


def format_local_error(action: Action, message: str) -> DisplayRecord:
    return DisplayRecord(action=action, style="err", text=escape(message))


def format_outcome(action: Action, outcome: CallOutcome) -> DisplayRecord:
    """Render a CallOutcome.

    Successful calls show only the pretty-printed body. Failures lead with
    the HTTP status and any transport error, followed by whatever body came
    back.
    """
    body = pretty(outcome_body(outcome))
    if outcome.success:
        return DisplayRecord(action=action, style="ok", text=escape(body))

    lines = [f"HTTP {outcome.http_status}"]
    if outcome.transport_error:
        lines.append(outcome.transport_error)
    if body:
        lines.append(body)
    return DisplayRecord(action=action, style="err", text=escape("\n".join(lines)))
