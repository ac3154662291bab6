"""Typer CLI for trueskill-console."""

from __future__ import annotations

import html
import uuid
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import structlog
import typer

if TYPE_CHECKING:
    from config.settings import ConsoleSettings
    from console.models import DisplayRecord, RequestContext

app = typer.Typer(name="trueskill-console", no_args_is_help=True)
logger = structlog.get_logger()

BaseOption = Annotated[str, typer.Option("--base", help="Override the API base URL")]
EnvOption = Annotated[
    str | None, typer.Option("--env", help="Load envs/.env.<name> (e.g. local)")
]
JsonLogsOption = Annotated[bool, typer.Option("--json-logs", help="Output JSON log lines")]
HtmlOption = Annotated[bool, typer.Option("--html", help="Print the result as an HTML box")]
FileOption = Annotated[
    Path | None, typer.Option("--file", "-f", help="Read the JSON payload from a file")
]


def _load_settings(env: str | None) -> ConsoleSettings:
    from config.settings import ConsoleSettings, env_file_path

    if env is None:
        return ConsoleSettings()
    try:
        return ConsoleSettings(_env_file=env_file_path(env))
    except FileNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from None


def _read_payload(payload: str | None, file: Path | None) -> str:
    """Payload text from the argument, or from --file when given."""
    if file is None:
        return payload or ""
    try:
        return file.read_text()
    except OSError as exc:
        typer.echo(f"Cannot read payload file {file}: {exc.strerror}", err=True)
        raise typer.Exit(code=1) from None


def _show(record: DisplayRecord, *, html_output: bool) -> None:
    if html_output:
        typer.echo(record.to_html())
        return
    color = typer.colors.GREEN if record.style == "ok" else typer.colors.RED
    typer.secho(html.unescape(record.text), fg=color)


def _submit(
    context: RequestContext,
    *,
    env: str | None,
    json_logs: bool,
    html_output: bool,
) -> None:
    """Route one submission and print its result.

    Exits non-zero when the result is an error; an unknown action prints
    nothing and exits cleanly.
    """
    from console.router import route
    from utils.logger import configure_logging

    settings = _load_settings(env)
    configure_logging(json_output=json_logs or settings.json_logs, log_level=settings.log_level)

    structlog.contextvars.bind_contextvars(submission_id=uuid.uuid4().hex[:12])
    try:
        record = route(
            context,
            default_base_url=settings.base_url,
            timeout=settings.timeout,
        )
    finally:
        structlog.contextvars.unbind_contextvars("submission_id")

    if record is None:
        return
    logger.info("cli.result", action=record.action.value, style=record.style)
    _show(record, html_output=html_output)
    if record.style == "err":
        raise typer.Exit(code=1)


@app.command()
def update(
    event_key: Annotated[str, typer.Argument(help="Event key with year, e.g. 2025nyrr")] = "",
    base: BaseOption = "",
    env: EnvOption = None,
    json_logs: JsonLogsOption = False,
    html_output: HtmlOption = False,
) -> None:
    """Clear ratings and rebuild them from an event's matches."""
    from console.models import Action, RequestContext

    context = RequestContext(Action.UPDATE.value, {"event_key": event_key}, base)
    _submit(context, env=env, json_logs=json_logs, html_output=html_output)


@app.command()
def push(
    payload: Annotated[str | None, typer.Argument(help="JSON array of match results")] = None,
    file: FileOption = None,
    base: BaseOption = "",
    env: EnvOption = None,
    json_logs: JsonLogsOption = False,
    html_output: HtmlOption = False,
) -> None:
    """Push live match results for incremental rating updates."""
    from console.models import Action, RequestContext

    context = RequestContext(
        Action.PUSH_RESULTS.value, {"push_json": _read_payload(payload, file)}, base
    )
    _submit(context, env=env, json_logs=json_logs, html_output=html_output)


@app.command()
def team(
    team_key: Annotated[str, typer.Argument(help="Team key, e.g. frc254")] = "",
    base: BaseOption = "",
    env: EnvOption = None,
    json_logs: JsonLogsOption = False,
    html_output: HtmlOption = False,
) -> None:
    """Look up one team's rating."""
    from console.models import Action, RequestContext

    context = RequestContext(Action.TEAM_LOOKUP.value, {"team_key": team_key}, base)
    _submit(context, env=env, json_logs=json_logs, html_output=html_output)


@app.command()
def predict(
    teams1: Annotated[
        str, typer.Option("--teams1", help="Alliance 1, space or comma separated")
    ] = "",
    teams2: Annotated[
        str, typer.Option("--teams2", help="Alliance 2, space or comma separated")
    ] = "",
    base: BaseOption = "",
    env: EnvOption = None,
    json_logs: JsonLogsOption = False,
    html_output: HtmlOption = False,
) -> None:
    """Predict a single match between two alliances."""
    from console.models import Action, RequestContext

    context = RequestContext(
        Action.PREDICT_ONE.value, {"teams1": teams1, "teams2": teams2}, base
    )
    _submit(context, env=env, json_logs=json_logs, html_output=html_output)


@app.command()
def batch(
    payload: Annotated[str | None, typer.Argument(help="JSON array of matchups")] = None,
    file: FileOption = None,
    base: BaseOption = "",
    env: EnvOption = None,
    json_logs: JsonLogsOption = False,
    html_output: HtmlOption = False,
) -> None:
    """Predict a batch of matches."""
    from console.models import Action, RequestContext

    context = RequestContext(
        Action.PREDICT_BATCH.value, {"batch_json": _read_payload(payload, file)}, base
    )
    _submit(context, env=env, json_logs=json_logs, html_output=html_output)


@app.command()
def submit(
    action: Annotated[str, typer.Option("--action", help="Form action name")],
    field: Annotated[
        list[str] | None, typer.Option("--field", help="Form field as name=value")
    ] = None,
    base: BaseOption = "",
    env: EnvOption = None,
    json_logs: JsonLogsOption = False,
    html_output: HtmlOption = False,
) -> None:
    """Submit a raw form: an action name plus its fields."""
    from console.models import RequestContext

    fields: dict[str, str] = {}
    for item in field or []:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"expected name=value, got '{item}'", param_hint="--field")
        fields[name] = value

    context = RequestContext(action, fields, base)
    _submit(context, env=env, json_logs=json_logs, html_output=html_output)
