"""Image studio endpoints: generate, edit, adjust and browse history."""

from fastapi import APIRouter, HTTPException, status

from mythos.core.errors import BatchFailedError, GenerationError

from ..dependencies import Controller
from ..models.requests import ImageAdjustRequest, ImageEditRequest, ImageGenerateRequest
from ..models.responses import AdjustedImageResponse, ImageListResponse, ImageResponse

router = APIRouter()


def _generation_failed(e: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Image generation failed: {e}",
    )


@router.post(
    "/generate",
    response_model=ImageListResponse,
    summary="Generate image variations",
    description="Request several candidates in parallel. Succeeds if at least one comes back.",
)
async def generate_images(request: ImageGenerateRequest, controller: Controller):
    try:
        items = await controller.create_images(request.prompt, request.aspect_ratio, request.count)
    except (GenerationError, BatchFailedError) as e:
        raise _generation_failed(e)
    return ImageListResponse(images=[ImageResponse.from_domain(i) for i in items])


@router.post(
    "/edit",
    response_model=ImageListResponse,
    summary="Edit an image",
    description="Apply an edit instruction to a source image, returning several candidates.",
)
async def edit_images(request: ImageEditRequest, controller: Controller):
    try:
        items = await controller.edit_images(
            request.image, request.prompt, request.aspect_ratio, request.count
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except (GenerationError, BatchFailedError) as e:
        raise _generation_failed(e)
    return ImageListResponse(images=[ImageResponse.from_domain(i) for i in items])


@router.post(
    "/adjust",
    response_model=AdjustedImageResponse,
    summary="Bake filters",
    description="Apply brightness, contrast and saturation. All at 100 returns the image untouched.",
)
def adjust_image(request: ImageAdjustRequest, controller: Controller):
    try:
        image = controller.adjust_image(
            request.image, request.brightness, request.contrast, request.saturation
        )
    except (ValueError, OSError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Could not read image: {e}")
    return AdjustedImageResponse(image=image)


@router.get(
    "/history",
    response_model=ImageListResponse,
    summary="Image history",
    description="The most recent images, newest first.",
)
async def image_history(controller: Controller):
    return ImageListResponse(images=[ImageResponse.from_domain(i) for i in controller.images.list()])


@router.delete(
    "/history/{image_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an image",
)
async def delete_image(image_id: str, controller: Controller):
    if not controller.images.delete(image_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Image {image_id} not found",
        )


@router.delete(
    "/history",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Clear image history",
)
async def clear_history(controller: Controller):
    controller.images.clear()
