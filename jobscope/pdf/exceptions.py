class PdfExtractionError(Exception):
    """Raised by a single extraction strategy when it cannot produce text."""
