"""Infographic endpoints: plan a deck, retry tiles, export as PDF."""

from fastapi import APIRouter, HTTPException, Response, status

from mythos.core.errors import GenerationError
from mythos.core.templates import INFOGRAPHIC_STYLES, INFOGRAPHIC_USE_CASES, apply_use_case

from ..dependencies import Controller
from ..models.requests import InfographicPlanRequest
from ..models.responses import (
    InfographicDeckResponse,
    InfographicPresetsResponse,
    InfographicTileResponse,
    UseCaseResponse,
)

router = APIRouter()


def _deck(controller) -> InfographicDeckResponse:
    state = controller.state
    return InfographicDeckResponse(
        tiles=[InfographicTileResponse.from_domain(i) for i in state.infographic_items],
        style=state.infographic_style,
        include_overlay=state.include_overlay,
    )


@router.post(
    "/plan",
    response_model=InfographicDeckResponse,
    summary="Build an infographic deck",
    description=(
        "Split the text into 4-8 tiles and render each one concurrently. "
        "Individual tiles may fail; check each tile's status."
    ),
)
async def plan_infographic(request: InfographicPlanRequest, controller: Controller):
    try:
        text, style = apply_use_case(request.use_case, request.text, request.style)
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown use case: {request.use_case}",
        )

    try:
        await controller.plan_infographic(text, style, request.aspect_ratio, request.include_overlay)
    except GenerationError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Infographic planning failed: {e}",
        )
    return _deck(controller)


@router.get(
    "/presets",
    response_model=InfographicPresetsResponse,
    summary="Use cases and styles",
    description="Preset prompt prefixes with their default style, and the known design styles.",
)
async def get_presets():
    return InfographicPresetsResponse(
        use_cases=[
            UseCaseResponse(id=key, prefix=prefix, style=style)
            for key, (prefix, style) in INFOGRAPHIC_USE_CASES.items()
        ],
        styles=INFOGRAPHIC_STYLES,
    )


@router.get(
    "/",
    response_model=InfographicDeckResponse,
    summary="Current deck",
)
async def get_deck(controller: Controller):
    return _deck(controller)


@router.post(
    "/tiles/{tile_id}/regenerate",
    response_model=InfographicTileResponse,
    summary="Regenerate a tile",
)
async def regenerate_tile(tile_id: str, controller: Controller):
    try:
        item = await controller.regenerate_tile(tile_id)
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tile {tile_id} not found",
        )
    return InfographicTileResponse.from_domain(item)


@router.get(
    "/deck.pdf",
    summary="Export deck as PDF",
    description="One page per finished tile on a dark background.",
    responses={200: {"content": {"application/pdf": {}}}},
)
async def export_deck(controller: Controller):
    if not controller.state.infographic_items:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No infographic deck has been generated",
        )
    return Response(
        content=controller.export_deck(),
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="infographic_deck.pdf"'},
    )
