"""HTTP route definitions for the service."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.schemas import (
    PanelState,
    PanelUpdate,
    PanelView,
    RefreshResponse,
    RenderRequest,
    RenderResponse,
    SnapshotPayload,
)
from services.parser import parse
from services.refresher import ScreenRefresher, build_default_refresher
from services.template import InvalidTemplate

router = APIRouter()


def get_refresher() -> ScreenRefresher:
    return build_default_refresher()


def _view(panel: PanelState, refresher: ScreenRefresher) -> PanelView:
    return PanelView(**panel.model_dump(), bound=refresher.is_bound(panel.device_id))


@router.post(
    "/render",
    response_model=RenderResponse,
    summary="Compile a template body and render it against a snapshot.",
)
async def render_template(request: RenderRequest) -> RenderResponse:
    template = parse(request.markup)
    if isinstance(template, InvalidTemplate):
        return RenderResponse(valid=False, text=template.message, error=template.error)
    return RenderResponse(valid=True, text=template.evaluate(request.snapshot.to_snapshot()))


@router.get(
    "/panels",
    response_model=list[PanelView],
    summary="List every known panel with its last written text.",
)
async def list_panels(
    refresher: ScreenRefresher = Depends(get_refresher),
) -> list[PanelView]:
    panels = sorted(refresher.board.scan(), key=lambda panel: panel.device_id)
    return [_view(panel, refresher) for panel in panels]


@router.put(
    "/panels/{device_id}",
    response_model=PanelView,
    summary="Create a panel or replace its custom data.",
)
async def put_panel(
    device_id: str,
    update: PanelUpdate,
    refresher: ScreenRefresher = Depends(get_refresher),
) -> PanelView:
    panel = refresher.board.set_custom_data(device_id, update.custom_data)
    refresher.observe_panel(device_id, panel.custom_data)
    return _view(panel, refresher)


@router.delete(
    "/panels/{device_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a panel from the board.",
)
async def delete_panel(
    device_id: str,
    refresher: ScreenRefresher = Depends(get_refresher),
) -> Response:
    try:
        refresher.board.remove_panel(device_id)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    refresher.registry.forget(device_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/panels/refresh",
    response_model=RefreshResponse,
    summary="Run one refresh cycle against the supplied snapshot.",
)
async def refresh_panels(
    snapshot: SnapshotPayload,
    refresher: ScreenRefresher = Depends(get_refresher),
) -> RefreshResponse:
    outputs = refresher.run_cycle(snapshot.to_snapshot())
    panels = sorted(refresher.board.scan(), key=lambda panel: panel.device_id)
    return RefreshResponse(
        bound=len(outputs),
        panels=[_view(panel, refresher) for panel in panels],
    )


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
