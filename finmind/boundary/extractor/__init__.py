"""
Document extraction boundary package.

Exports:
  - DocumentExtractor: PDF and plain-text extraction
  - ALLOWED_EXTENSIONS: Accepted upload file extensions
"""

from finmind.boundary.extractor.document_extractor import ALLOWED_EXTENSIONS, DocumentExtractor

__all__ = ["ALLOWED_EXTENSIONS", "DocumentExtractor"]
