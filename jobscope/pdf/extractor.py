"""Ordered-fallback text extraction for uploaded PDF documents."""

import asyncio
import re
from collections.abc import Sequence

from jobscope.config.settings import Settings
from jobscope.logging.logger import Log
from jobscope.pdf.base import BasePdfExtractor
from jobscope.pdf.exceptions import PdfExtractionError
from jobscope.pdf.factory import PdfExtractorFactory
from jobscope.pdf.models import (
    PDF_MIME_TYPE,
    DocumentMetadata,
    ExtractionFailure,
    ExtractionOutcome,
    ExtractionSuccess,
    RawDocument,
    format_file_size,
    generate_safe_file_name,
)

MIN_TEXT_LENGTH = 50
MAX_DOCUMENT_BYTES = 2 * 1024 * 1024

_PAGE_RE = re.compile(rb"/Type\s*/Page(?![A-Za-z])")


def count_pages(pdf_bytes: bytes) -> int | None:
    count = len(_PAGE_RE.findall(pdf_bytes))
    return count or None


class TextExtractor:
    """Runs extraction strategies one after another until one yields enough text.

    A strategy is attempted only when every earlier one raised
    ``PdfExtractionError`` or produced fewer than ``min_text_length``
    characters. Strategies never run concurrently.
    """

    def __init__(
        self,
        strategies: Sequence[BasePdfExtractor],
        *,
        min_text_length: int = MIN_TEXT_LENGTH,
        max_document_bytes: int = MAX_DOCUMENT_BYTES,
    ) -> None:
        if not strategies:
            raise ValueError("At least one extraction strategy is required")
        self._strategies = list(strategies)
        self._min_text_length = min_text_length
        self._max_document_bytes = max_document_bytes

    def validate(self, document: RawDocument) -> str | None:
        """Return the rejection reason for *document*, or None when acceptable."""
        is_pdf = (
            document.mime_type == PDF_MIME_TYPE
            or document.file_name.lower().endswith(".pdf")
        )
        if not is_pdf:
            return "Only PDF files are supported"
        if document.size > self._max_document_bytes:
            limit = format_file_size(self._max_document_bytes).replace(" ", "")
            return f"File size exceeds {limit} limit"
        if document.size == 0:
            return "File is empty"
        return None

    async def extract(self, document: RawDocument) -> ExtractionOutcome:
        rejection = self.validate(document)
        if rejection is not None:
            Log.warning(f"Rejected {document.file_name}: {rejection}")
            return ExtractionFailure(reason=rejection)

        Log.info(
            f"Extracting text from {document.file_name} "
            f"({format_file_size(document.size)})"
        )
        attempts: list[str] = []
        for strategy in self._strategies:
            try:
                text = await asyncio.to_thread(strategy.extract, document.content)
            except PdfExtractionError as exc:
                Log.warning(f"Strategy {strategy.name} failed: {exc}")
                attempts.append(f"{strategy.name}: {exc}")
                continue

            text = text.strip()
            if len(text) < self._min_text_length:
                Log.warning(
                    f"Strategy {strategy.name} produced {len(text)} chars, "
                    f"below minimum of {self._min_text_length}"
                )
                attempts.append(f"{strategy.name}: insufficient text ({len(text)} chars)")
                continue

            Log.info(f"Strategy {strategy.name} extracted {len(text)} chars")
            Log.debug(f"Text preview: {text[:300]}")
            return ExtractionSuccess(
                text=text,
                strategy_used=strategy.name,
                metadata=DocumentMetadata(
                    file_size=document.size,
                    file_name=generate_safe_file_name(document.file_name),
                    page_count=count_pages(document.content),
                ),
            )

        Log.error(f"All extraction strategies failed for {document.file_name}")
        return ExtractionFailure(
            reason=(
                f"Could not extract text from {document.file_name}. "
                "Please try a different PDF file."
            ),
            attempts=attempts,
        )


def build_text_extractor(settings: Settings) -> TextExtractor:
    return TextExtractor(
        PdfExtractorFactory.create_chain(settings),
        min_text_length=settings.min_text_length,
        max_document_bytes=settings.max_document_bytes,
    )
