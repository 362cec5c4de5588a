from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from pydantic import ValidationError

from app.schemas import SnapshotPayload
from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_panels, render_preview
from services.parser import parse
from services.template import InvalidTemplate
from settings import get_settings


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Author, preview and refresh telemetry templates for text panels.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


def _template_body(text: str) -> str:
    marker = get_settings().marker
    if text.startswith(marker):
        _, _, body = text.partition("\n")
        return body
    return text


def _load_snapshot(path: Path) -> Dict[str, Any]:
    try:
        payload = SnapshotPayload.model_validate_json(path.read_text())
    except ValidationError as exc:
        typer.secho(f"Invalid snapshot file {path}:\n{exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    return payload.model_dump(mode="json")


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="InfoScreens API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each API request.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("check")
def check_command(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Markup file."),
) -> None:
    """Compile a markup file locally and report whether it is valid."""
    template = parse(_template_body(file.read_text()))
    if isinstance(template, InvalidTemplate):
        typer.secho(f"{template.error}: {template.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.secho(f"Template OK ({len(template.elements)} elements).", fg=typer.colors.GREEN)


@app.command("render")
def render_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Markup file."),
    snapshot: Path = typer.Option(
        ...,
        "--snapshot",
        "-s",
        exists=True,
        dir_okay=False,
        readable=True,
        help="JSON telemetry snapshot.",
    ),
) -> None:
    """Preview a markup file against a snapshot through the API."""
    state = _get_state(ctx)
    payload = state.client.render(_template_body(file.read_text()), _load_snapshot(snapshot))
    render_preview(payload)
    if not payload.get("valid"):
        raise typer.Exit(code=1)


@app.command("set-panel")
def set_panel_command(
    ctx: typer.Context,
    device_id: str = typer.Argument(..., help="Panel identifier."),
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Custom data file."),
) -> None:
    """Upload a file as the custom data of a panel."""
    state = _get_state(ctx)
    panel = state.client.set_panel(device_id, file.read_text())
    typer.secho(f"Panel {panel.get('device_id')} updated.", fg=typer.colors.GREEN)


@app.command("refresh")
def refresh_command(
    ctx: typer.Context,
    snapshot: Path = typer.Option(
        ...,
        "--snapshot",
        "-s",
        exists=True,
        dir_okay=False,
        readable=True,
        help="JSON telemetry snapshot.",
    ),
) -> None:
    """Run one refresh cycle and print every panel's text."""
    state = _get_state(ctx)
    payload = state.client.refresh(_load_snapshot(snapshot))
    render_panels(payload)


@app.command("snapshot-template")
def snapshot_template_command() -> None:
    """Print an empty snapshot document to start from."""
    typer.echo(json.dumps(SnapshotPayload().model_dump(mode="json"), indent=2))
