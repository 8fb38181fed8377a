import io

import pdfplumber

from jobscope.pdf.base import BasePdfExtractor
from jobscope.pdf.exceptions import PdfExtractionError
from jobscope.pdf.layout import TextFragment, reading_order_text


class PdfPlumberAdapter(BasePdfExtractor):
    """Structured parse using pdfplumber word positions."""

    name = "pdfplumber"

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [self._page_text(page) for page in pdf.pages]
            return "\n".join(pages).strip()
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc

    @staticmethod
    def _page_text(page: "pdfplumber.page.Page") -> str:
        height = float(page.height)
        fragments = [
            TextFragment(
                text=word["text"],
                x0=float(word["x0"]),
                x1=float(word["x1"]),
                y=height - float(word["bottom"]),
            )
            for word in page.extract_words()
        ]
        return reading_order_text(fragments)
