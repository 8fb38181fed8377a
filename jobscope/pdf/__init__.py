from jobscope.pdf.extractor import TextExtractor, build_text_extractor
from jobscope.pdf.models import (
    ExtractionFailure,
    ExtractionOutcome,
    ExtractionSuccess,
    RawDocument,
)

__all__ = [
    "ExtractionFailure",
    "ExtractionOutcome",
    "ExtractionSuccess",
    "RawDocument",
    "TextExtractor",
    "build_text_extractor",
]
