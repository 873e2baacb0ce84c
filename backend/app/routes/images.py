"""
StudySphere Backend: Lesson Image Route
=========================================

What:  Serves lesson images from IMAGES_DIR at /images/{filename}.
Who:   <img> tags in the storefront, using the lesson's `image` field.

Missing files answer with the usual JSON error body
({"error": "not_found", "message": "Image not found", ...}) rather than
an empty 404, so the frontend can tell a bad name from a network error.
"""

from fastapi import APIRouter
from fastapi.responses import FileResponse

from app.schemas.common import ErrorResponse
from app.services.image_service import image_service

router = APIRouter(tags=["Images"])


@router.get(
    "/images/{filename:path}",
    summary="Serve a lesson image",
    response_class=FileResponse,
    responses={
        200: {"description": "Image file"},
        400: {"description": "Invalid image path or type", "model": ErrorResponse},
        404: {"description": "Image not found", "model": ErrorResponse},
    },
)
async def serve_image(filename: str) -> FileResponse:
    path = image_service.resolve(filename)
    return FileResponse(
        path=str(path),
        media_type=image_service.media_type(path),
        headers={"Cache-Control": "public, max-age=86400"},
    )
