"""SBC upload endpoint."""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from src import config
from src.api.deps import get_generator, get_partitioner
from src.documents import DocumentExtractionError
from src.llm import GenerationExhaustedError, StructuredGenerator
from src.schemas.policy import ParsedPolicy
from src.services.sbc_parser import Partitioner, SBCParseError, parse_sbc
from src.utils.logging import log, get_logger

MODULE = "policies"
logger = get_logger()

router = APIRouter()

PDF_MAGIC = b"%PDF"


@router.post("/parse", response_model=ParsedPolicy)
async def parse_policy(
    file: UploadFile = File(..., description="Summary of Benefits and Coverage PDF"),
    generator: StructuredGenerator = Depends(get_generator),
    partitioner: Partitioner = Depends(get_partitioner),
):
    """Extract structured plan data from an uploaded SBC."""
    content = await file.read()
    filename = file.filename or "upload.pdf"

    if not content:
        raise HTTPException(status_code=400, detail="No file uploaded")
    if len(content) > config.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="File too large")
    if not content.startswith(PDF_MAGIC):
        log.warning(logger, MODULE, "invalid_upload", "Upload is not a PDF",
                    filename=filename, content_type=file.content_type)
        raise HTTPException(status_code=400, detail="File must be a PDF")

    try:
        return await parse_sbc(content, filename, generator=generator, partitioner=partitioner)
    except SBCParseError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except DocumentExtractionError as e:
        raise HTTPException(status_code=502, detail=f"Document extraction failed: {e}")
    except GenerationExhaustedError as e:
        raise HTTPException(status_code=502, detail=str(e))
