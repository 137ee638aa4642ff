"""Story endpoints: history, streaming generation, reading and text tools."""

import logging

from fastapi import APIRouter, HTTPException, Response, status
from fastapi.responses import StreamingResponse

from mythos.core.errors import GenerationError
from mythos.core.exporters import export_markdown, story_filename
from mythos.core.templates import STORY_TEMPLATES

from ..dependencies import Controller
from ..models.requests import AnalyzeRequest, RewriteRequest, StoryConfigRequest, UpdateContentRequest
from ..models.responses import (
    PageResponse,
    PagesResponse,
    StoryListResponse,
    StoryResponse,
    StorySummaryResponse,
    TemplateResponse,
    TextResponse,
)
from ..services.studio import StoryNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()


def _not_found(story_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Story {story_id} not found",
    )


@router.get(
    "/",
    response_model=StoryListResponse,
    summary="List stories",
    description="Saved stories, newest first.",
)
async def list_stories(controller: Controller):
    stories = controller.list_stories()
    return StoryListResponse(
        stories=[StorySummaryResponse.from_domain(s) for s in stories],
        total=len(stories),
    )


@router.get(
    "/templates",
    response_model=list[TemplateResponse],
    summary="List story templates",
    description="Preset wizard answers that can be loaded and edited before generating.",
)
async def list_templates():
    return [
        TemplateResponse(title=t.title, genre=t.genre, config=StoryConfigRequest.from_domain(t.config))
        for t in STORY_TEMPLATES
    ]


@router.post(
    "/generate",
    summary="Generate a story",
    description=(
        "Stream a new story, or a continuation when existing_content is supplied. "
        "The body is plain text delivered as it is written; the finished story is saved to history."
    ),
    responses={
        200: {"content": {"text/plain": {}}},
        502: {"description": "The model call failed before any text was produced"},
    },
)
async def generate_story(request: StoryConfigRequest, controller: Controller):
    """Stream generated text. Failures before the first chunk become a 502."""
    progress = controller.generate_story(request.to_domain())

    try:
        first = await progress.__anext__()
    except StopAsyncIteration:
        first = None
    except GenerationError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Story generation failed: {e}",
        ) from e

    async def body():
        if first is None:
            return
        sent = len(first)
        yield first
        try:
            async for text in progress:
                yield text[sent:]
                sent = len(text)
        except GenerationError:
            # Headers are already sent; the client sees a truncated stream
            logger.exception("Story stream ended early")

    return StreamingResponse(body(), media_type="text/plain; charset=utf-8")


@router.post(
    "/rewrite",
    response_model=TextResponse,
    summary="Rewrite a passage",
    description="Rewrite text according to an instruction. The original is returned if the model fails.",
)
def rewrite(request: RewriteRequest, controller: Controller):
    return TextResponse(text=controller.rewrite(request.text, request.instruction))


@router.post(
    "/analyze",
    response_model=TextResponse,
    summary="Critique a concept",
    description="Short critique of a story concept with suggestions. Empty text if the model fails.",
)
def analyze(request: AnalyzeRequest, controller: Controller):
    return TextResponse(text=controller.quick_analyze(request.text))


@router.get(
    "/{story_id}",
    response_model=StoryResponse,
    summary="Get a story",
)
async def get_story(story_id: str, controller: Controller):
    try:
        return StoryResponse.from_domain(controller.get_story(story_id))
    except StoryNotFoundError:
        raise _not_found(story_id)


@router.delete(
    "/{story_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a story",
)
async def delete_story(story_id: str, controller: Controller):
    try:
        controller.delete_story(story_id)
    except StoryNotFoundError:
        raise _not_found(story_id)


@router.put(
    "/{story_id}/content",
    response_model=StoryResponse,
    summary="Replace story text",
    description="Save edited text; title and excerpt are derived again.",
)
async def update_content(story_id: str, request: UpdateContentRequest, controller: Controller):
    try:
        return StoryResponse.from_domain(controller.update_story_content(story_id, request.content))
    except StoryNotFoundError:
        raise _not_found(story_id)


@router.post(
    "/{story_id}/select",
    response_model=StoryResponse,
    summary="Open a story",
    description="Make the story active and switch the studio to the reader.",
)
async def select_story(story_id: str, controller: Controller):
    try:
        return StoryResponse.from_domain(controller.select_story(story_id))
    except StoryNotFoundError:
        raise _not_found(story_id)


@router.get(
    "/{story_id}/pages",
    response_model=PagesResponse,
    summary="Paginate a story",
    description="Split the story into reader pages labelled with their chapter.",
)
async def get_pages(story_id: str, controller: Controller):
    try:
        pages = controller.story_pages(story_id)
    except StoryNotFoundError:
        raise _not_found(story_id)

    return PagesResponse(
        story_id=story_id,
        pages=[PageResponse.from_domain(p) for p in pages],
        total=len(pages),
    )


@router.get(
    "/{story_id}/markdown",
    summary="Download as Markdown",
    responses={200: {"content": {"text/markdown": {}}}},
)
async def download_markdown(story_id: str, controller: Controller):
    try:
        story = controller.get_story(story_id)
    except StoryNotFoundError:
        raise _not_found(story_id)

    return Response(
        content=export_markdown(story),
        media_type="text/markdown; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{story_filename(story, "md")}"'},
    )
