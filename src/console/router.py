"""Action router: parse, call and format one operator submission."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from console import parsers
from console.errors import ValidationError
from console.formatter import format_local_error, format_outcome
from console.gateway import DEFAULT_TIMEOUT, build_url, call_api
from console.models import Action, DisplayRecord, RequestContext

logger = structlog.get_logger()


@dataclass(frozen=True)
class Route:
    """Parser plus endpoint for one action.

    For GET routes the parsed value becomes the query parameter named by
    ``query_param``; for POST routes it is the JSON body.
    """

    method: str
    path: str
    parse: Callable[[RequestContext], Any]
    query_param: str | None = None


ROUTES: dict[Action, Route] = {
    Action.UPDATE: Route(
        "POST", "/update", lambda ctx: parsers.parse_event_key(ctx.get("event_key"))
    ),
    Action.PUSH_RESULTS: Route(
        "POST", "/push_results", lambda ctx: parsers.parse_json_container(ctx.get("push_json"))
    ),
    Action.TEAM_LOOKUP: Route(
        "GET",
        "/predict_team",
        lambda ctx: parsers.parse_team_key(ctx.get("team_key")),
        query_param="team",
    ),
    Action.PREDICT_ONE: Route(
        "POST",
        "/predict_match",
        lambda ctx: parsers.parse_alliances(ctx.get("teams1"), ctx.get("teams2")),
    ),
    Action.PREDICT_BATCH: Route(
        "POST", "/predict_batch", lambda ctx: parsers.parse_json_container(ctx.get("batch_json"))
    ),
}


def resolve_base_url(override: str, default: str) -> str:
    """The submitted base URL wins unless it is empty."""
    return override if override else default


def route(
    context: RequestContext,
    *,
    default_base_url: str,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.BaseTransport | None = None,
) -> DisplayRecord | None:
    """Run one submission through parse, call and format.

    Returns:
        The DisplayRecord for the submission, or None when the action is not
        one the console knows. Unknown actions are a no-op, not an error.
    """
    action = Action.lookup(context.action)
    if action is None:
        logger.debug("router.unknown_action", action=context.action)
        return None

    entry = ROUTES[action]
    logger.info("router.dispatch", action=action.value)

    try:
        payload = entry.parse(context)
    except ValidationError as exc:
        logger.info("router.local_error", action=action.value, message=exc.message)
        return format_local_error(action, exc.message)

    base_url = resolve_base_url(context.base_url, default_base_url)
    if entry.query_param:
        url = build_url(base_url, entry.path, {entry.query_param: payload})
        body = None
    else:
        url = build_url(base_url, entry.path)
        body = payload

    outcome = call_api(entry.method, url, body, timeout=timeout, transport=transport)
    return format_outcome(action, outcome)
