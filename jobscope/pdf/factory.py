from jobscope.config.settings import Settings
from jobscope.pdf.base import BasePdfExtractor
from jobscope.pdf.literal_scan import LiteralStringScanner
from jobscope.pdf.pdfplumber_adapter import PdfPlumberAdapter
from jobscope.pdf.pymupdf_adapter import PyMuPdfAdapter
from jobscope.pdf.stream_scan import StreamPatternScanner


class PdfExtractorFactory:
    """Creates the structured-parse adapter and the full fallback chain."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()

    @classmethod
    def create_chain(cls, settings: Settings) -> list[BasePdfExtractor]:
        """Strategies in priority order: structured parse, literal scan, stream scan."""
        return [cls.create(settings), LiteralStringScanner(), StreamPatternScanner()]
