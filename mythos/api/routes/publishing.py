"""Publisher endpoints: book settings, print preview, covers and exports."""

from fastapi import APIRouter, HTTPException, Query, Response, status

from mythos.core.errors import BatchFailedError, GenerationError, LayoutError
from mythos.core.exporters import story_filename
from mythos.core.templates import COVER_STYLES

from ..dependencies import Controller
from ..models.requests import CoverRequest, PublishingConfigModel, SetCoverRequest
from ..models.responses import CoverResponse, PreviewResponse, StoryResponse
from ..services.studio import StoryNotFoundError

router = APIRouter()

EXPORT_MEDIA_TYPES = {
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "pdf": "application/pdf",
    "md": "text/markdown; charset=utf-8",
}


def _not_found(story_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Story {story_id} not found",
    )


@router.get(
    "/cover-styles",
    response_model=list[str],
    summary="List cover styles",
)
async def list_cover_styles():
    return COVER_STYLES


@router.get(
    "/{story_id}/config",
    response_model=PublishingConfigModel,
    summary="Get publishing settings",
    description="Saved settings, or defaults seeded from the story when none were saved.",
)
async def get_config(story_id: str, controller: Controller):
    try:
        return PublishingConfigModel.from_domain(controller.get_publishing(story_id))
    except StoryNotFoundError:
        raise _not_found(story_id)


@router.put(
    "/{story_id}/config",
    response_model=StoryResponse,
    summary="Save publishing settings",
)
async def update_config(story_id: str, request: PublishingConfigModel, controller: Controller):
    try:
        story = controller.update_publishing(story_id, request.to_domain())
    except StoryNotFoundError:
        raise _not_found(story_id)
    return StoryResponse.from_domain(story)


@router.get(
    "/{story_id}/preview",
    response_model=PreviewResponse,
    summary="Print layout preview",
    description="Page geometry in CSS pixels at the given zoom, with TOC, drop cap and pages.",
)
async def preview(
    story_id: str,
    controller: Controller,
    zoom: float = Query(default=1.0, gt=0, le=4, description="Preview scale factor"),
):
    try:
        layout = controller.preview(story_id, zoom)
    except StoryNotFoundError:
        raise _not_found(story_id)
    except LayoutError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return PreviewResponse.from_domain(layout)


@router.post(
    "/{story_id}/covers",
    response_model=CoverResponse,
    summary="Generate cover candidates",
    description="Cover art at 2:3 on the high-fidelity image model, at the saved resolution.",
)
async def generate_covers(story_id: str, request: CoverRequest, controller: Controller):
    try:
        images = await controller.generate_covers(story_id, request.concept, request.style, request.count)
    except StoryNotFoundError:
        raise _not_found(story_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except (GenerationError, BatchFailedError) as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Cover generation failed: {e}",
        )
    return CoverResponse(images=images)


@router.put(
    "/{story_id}/cover",
    response_model=StoryResponse,
    summary="Choose a cover",
)
async def set_cover(story_id: str, request: SetCoverRequest, controller: Controller):
    try:
        return StoryResponse.from_domain(controller.set_cover(story_id, request.image))
    except StoryNotFoundError:
        raise _not_found(story_id)


@router.get(
    "/{story_id}/export/{fmt}",
    summary="Export the book",
    description="Download the book as docx (print manuscript), pdf or md.",
    responses={200: {"content": {media: {} for media in EXPORT_MEDIA_TYPES.values()}}},
)
def export_book(story_id: str, fmt: str, controller: Controller):
    if fmt not in EXPORT_MEDIA_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported export format: {fmt}",
        )
    try:
        story = controller.get_story(story_id)
        content = controller.export(story_id, fmt)
    except StoryNotFoundError:
        raise _not_found(story_id)

    return Response(
        content=content,
        media_type=EXPORT_MEDIA_TYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="{story_filename(story, fmt)}"'},
    )
