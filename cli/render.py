from __future__ import annotations

from typing import Any, Dict

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_block(text: str) -> None:
    for line in text.splitlines() or [""]:
        typer.echo(f"  | {line}")


def render_preview(payload: Dict[str, Any]) -> None:
    if payload.get("valid"):
        echo_heading("Rendered Output")
        echo_block(payload.get("text") or "")
        return
    typer.secho(f"Template invalid ({payload.get('error')})", fg=typer.colors.RED, bold=True)
    echo_block(payload.get("text") or "")


def render_panels(payload: Dict[str, Any]) -> None:
    panels = payload.get("panels") or []
    echo_heading(f"Refreshed {payload.get('bound', 0)} of {len(panels)} panels")
    for panel in panels:
        typer.echo()
        state = "bound" if panel.get("bound") else "unbound"
        echo_heading(f"{panel.get('device_id')} ({state})")
        echo_block(panel.get("text") or "")
