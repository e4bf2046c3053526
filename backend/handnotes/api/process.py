import logging

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from handnotes.errors import HandnotesError, InvalidInput, UpstreamFailure
from handnotes.models.note import MeetingData
from handnotes.services.extraction import ExtractionClient, get_extraction_client

LOGGER = logging.getLogger("handnotes.api")

router = APIRouter(prefix="/api", tags=["extraction"])


@router.post("/process-notes", response_model=MeetingData)
async def process_notes(
    request: Request,
    extractor: ExtractionClient = Depends(get_extraction_client),
):
    """
    Forward one image to the AI gateway and return the structured notes.
    Body: {"imageBase64": "<data URL>"}. Errors come back as {"error": ...}.
    """
    try:
        body = await request.json()
    except ValueError:
        body = None
    image = body.get("imageBase64") if isinstance(body, dict) else None
    if not image or not isinstance(image, str):
        raise InvalidInput()

    try:
        return await run_in_threadpool(extractor.extract, image)
    except HandnotesError:
        raise
    except Exception as e:
        LOGGER.exception("process-notes error: %s", e)
        raise UpstreamFailure() from e
