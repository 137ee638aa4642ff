"""Studio shell endpoints: current view and navigation."""

from fastapi import APIRouter, HTTPException, status

from ..dependencies import Controller
from ..models.requests import NavigateRequest
from ..models.responses import StudioStateResponse
from ..services.studio import AppView

router = APIRouter()


def _state(controller) -> StudioStateResponse:
    state = controller.state
    return StudioStateResponse(
        view=state.view.value,
        active_story_id=state.active_story_id,
        is_generating=state.is_generating,
        has_generated_story=state.generated_story is not None,
        infographic_tiles=len(state.infographic_items),
    )


@router.get("/", response_model=StudioStateResponse, summary="Current studio state")
async def get_state(controller: Controller):
    return _state(controller)


@router.post("/navigate", response_model=StudioStateResponse, summary="Switch view")
async def navigate(request: NavigateRequest, controller: Controller):
    try:
        view = AppView(request.view)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown view: {request.view}",
        )
    controller.navigate(view)
    return _state(controller)


@router.post(
    "/reset",
    response_model=StudioStateResponse,
    summary="Back to dashboard",
    description="Clear the active story and return to the dashboard.",
)
async def reset(controller: Controller):
    controller.reset()
    return _state(controller)
