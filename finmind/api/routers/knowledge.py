"""
Knowledge upload API endpoint.

Routes: POST /knowledge/upload (multipart file)

Dependencies: finmind.application.services.knowledge_service
System role: Document ingestion HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from finmind.api.deps import get_knowledge_service
from finmind.application.services.knowledge_service import KnowledgeService
from finmind.core.exceptions import InvalidConfig, ParseError, ProviderError, VectorStoreError
from finmind.models.knowledge import UploadResponse
from finmind.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/knowledge", tags=["knowledge"])

MAX_FILE_SIZE = 20 * 1024 * 1024


@router.post("/upload", response_model=UploadResponse)
async def upload_knowledge(
    file: UploadFile = File(...),
    knowledge_service: KnowledgeService = Depends(get_knowledge_service),
) -> UploadResponse:
    """
    Upload a document into the knowledge base.

    Args:
        file: Uploaded file (.pdf, .txt, .md, .csv)
        knowledge_service: Injected KnowledgeService

    Returns:
        UploadResponse: Ingestion outcome with chunk counts

    Raises:
        HTTPException(400): Missing filename, oversized, unsupported or unreadable file
        HTTPException(502): Embedding or vector index failure
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="Filename is required")

    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    if len(content) > MAX_FILE_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {MAX_FILE_SIZE // (1024 * 1024)}MB",
        )

    try:
        return await knowledge_service.upload_document(file.filename, content)
    except (ParseError, InvalidConfig) as e:
        logger.warning(f"{__name__}:upload_knowledge - Rejected upload: {e}", extra={"source_id": file.filename})
        raise HTTPException(status_code=400, detail=e.message)
    except (ProviderError, VectorStoreError) as e:
        log_exception_with_context(
            logger,
            f"{__name__}:upload_knowledge - Ingestion failed",
            e,
            source_id=file.filename,
        )
        raise HTTPException(status_code=502, detail=f"Knowledge ingestion failed: {e.message}")
