"""
Document text extraction.

PDF files are parsed with LangChain PyPDFLoader from a temporary file;
plain-text formats are decoded as UTF-8 (a leading BOM is dropped).

Dependencies: langchain_community.document_loaders, finmind.core.exceptions
System role: Upload stage that turns file bytes into text for the chunker
"""

import logging
import os
import tempfile
from pathlib import Path

from langchain_community.document_loaders import PyPDFLoader

from finmind.core.exceptions import ParseError, UnsupportedFormatError

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = frozenset({".txt", ".md", ".csv"})
PDF_EXTENSION = ".pdf"
ALLOWED_EXTENSIONS = TEXT_EXTENSIONS | {PDF_EXTENSION}


class DocumentExtractor:
    """Extract plain text from uploaded file bytes."""

    def parse(self, content: bytes, filename: str) -> str:
        """
        Extract text from a document.

        Args:
            content: Raw file bytes
            filename: Original filename, used to select the parser

        Returns:
            str: Extracted text (never empty)

        Raises:
            UnsupportedFormatError: If the extension is not supported
            ParseError: If extraction fails or yields no text
        """
        suffix = Path(filename or "").suffix.lower()
        if suffix not in ALLOWED_EXTENSIONS:
            raise UnsupportedFormatError(
                f"Unsupported file format: '{suffix or filename}'. "
                f"Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}",
                filename=filename,
            )

        if suffix == PDF_EXTENSION:
            text = self._parse_pdf(content, filename)
        else:
            text = self._parse_text(content, filename)

        if not text.strip():
            raise ParseError("Document contains no extractable text", filename=filename)

        logger.info(
            f"{__name__}:parse - Extracted {len(text)} characters",
            extra={"source_id": filename, "format": suffix},
        )
        return text

    def _parse_text(self, content: bytes, filename: str) -> str:
        try:
            return content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(
                "Text file is not valid UTF-8",
                filename=filename,
                details={"error": str(e)},
            ) from e

    def _parse_pdf(self, content: bytes, filename: str) -> str:
        fd, temp_path = tempfile.mkstemp(prefix="finmind_", suffix=PDF_EXTENSION)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
            documents = PyPDFLoader(temp_path).load()
        except Exception as e:
            raise ParseError(f"Failed to parse PDF: {e}", filename=filename) from e
        finally:
            os.unlink(temp_path)

        return "\n".join(document.page_content for document in documents)
