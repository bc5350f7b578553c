class DocumentError(Exception):
    """Base exception for document ingestion errors."""


class DocumentReadError(DocumentError):
    """Raised when a document file cannot be read from disk."""


class PdfRasterizationError(DocumentError):
    """Raised when PDF pages cannot be rendered to images."""
