import logging

from fastapi import APIRouter, File, UploadFile  # type: ignore
from fastapi.responses import JSONResponse  # type: ignore

from hvac_diag.agent.diagnosis_agent import CompletionError
from hvac_diag.agent.equipment import analyze_equipment_image

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Equipment"])

MAX_IMAGE_BYTES = 5 * 1024 * 1024


@router.post("/analyze-image")
async def analyze_image(image: UploadFile | None = File(None)):
    if image is None:
        return JSONResponse(status_code=400, content={"error": "No image file provided"})

    data = await image.read()
    if not data:
        return JSONResponse(status_code=400, content={"error": "No image file provided"})
    if len(data) > MAX_IMAGE_BYTES:
        return JSONResponse(status_code=400, content={"error": "Image exceeds the 5MB limit"})

    try:
        return analyze_equipment_image(data, image.content_type or "image/jpeg")
    except CompletionError as exc:
        log.error("Image analysis error: %s", exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "An error occurred while analyzing the image",
                "details": exc.message,
            },
        )
