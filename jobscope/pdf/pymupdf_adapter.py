import pymupdf

from jobscope.pdf.base import BasePdfExtractor
from jobscope.pdf.exceptions import PdfExtractionError
from jobscope.pdf.layout import TextFragment, reading_order_text


class PyMuPdfAdapter(BasePdfExtractor):
    """Structured parse using PyMuPDF word positions."""

    name = "pymupdf"

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [self._page_text(page) for page in doc]
            return "\n".join(pages).strip()
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc

    @staticmethod
    def _page_text(page: "pymupdf.Page") -> str:
        height = float(page.rect.height)
        # words: (x0, y0, x1, y1, text, block_no, line_no, word_no), y top-down
        fragments = [
            TextFragment(text=word[4], x0=word[0], x1=word[2], y=height - word[3])
            for word in page.get_text("words")
        ]
        return reading_order_text(fragments)
