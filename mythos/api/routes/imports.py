"""File import endpoint: turn uploaded text or PDF files into plain text."""

from fastapi import APIRouter, File, HTTPException, UploadFile, status

from mythos.core.errors import UnsupportedFileError
from mythos.core.importers import extract_text

from ..models.responses import ImportResponse

router = APIRouter()


@router.post(
    "/",
    response_model=ImportResponse,
    summary="Import a document",
    description="Extract text from a .txt, .md or .pdf upload for use as story or infographic input.",
)
async def import_file(file: UploadFile = File(...)):
    data = await file.read()
    try:
        text = extract_text(file.filename or "", data, file.content_type or "")
    except UnsupportedFileError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return ImportResponse(filename=file.filename or "", text=text, characters=len(text))
