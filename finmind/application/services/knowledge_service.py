"""
Knowledge upload service.

Extracts text from an uploaded file and stores it in the knowledge store.

Dependencies: fastapi.concurrency, finmind.boundary.extractor, finmind.core.knowledge_store
System role: Upload orchestration for the knowledge API
"""

import logging

from fastapi.concurrency import run_in_threadpool

from finmind.boundary.extractor.document_extractor import DocumentExtractor
from finmind.core.knowledge_store import KnowledgeStore
from finmind.models.knowledge import UploadResponse
from finmind.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


class KnowledgeService:
    """Document ingestion into the knowledge store."""

    def __init__(self, extractor: DocumentExtractor, store: KnowledgeStore) -> None:
        """
        Initialize knowledge service.

        Args:
            extractor: Document text extractor
            store: Knowledge store receiving the extracted text
        """
        self.extractor = extractor
        self.store = store

    async def upload_document(self, filename: str, content: bytes) -> UploadResponse:
        """
        Extract, chunk, embed and store one document.

        Args:
            filename: Original filename, used as the source id
            content: Raw file bytes

        Returns:
            UploadResponse: Outcome with chunk, stored and skipped counts

        Raises:
            ParseError: If the file cannot be parsed or holds no text
            VectorStoreError: If the vector index rejects an upsert
        """
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:upload_document - START",
            source_id=filename,
            size=len(content),
        )

        text = await run_in_threadpool(self.extractor.parse, content, filename)
        report = await self.store.store(filename, text)

        skipped = len(report.skipped_chunks)
        if report.stored_count == 0:
            message = f"No chunks of '{filename}' could be embedded; nothing was stored"
        elif skipped:
            message = f"Learned '{filename}': stored {report.stored_count} chunks, skipped {skipped}"
        else:
            message = f"Learned '{filename}': stored {report.stored_count} chunks"

        logger.info(f"{__name__}:upload_document - {message}", extra={"source_id": filename})
        return UploadResponse(
            success=report.stored_count > 0,
            message=message,
            source_id=filename,
            chunk_count=report.chunk_count,
            stored_count=report.stored_count,
            skipped_count=skipped,
        )
