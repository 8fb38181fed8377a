import re

from jobscope.pdf.base import BasePdfExtractor
from jobscope.pdf.exceptions import PdfExtractionError

PDF_MAGIC = b"%PDF-"

_LITERAL_RE = re.compile(r"\(((?:\\.|[^\\)\r\n])*)\)")
_ESCAPE_RE = re.compile(r"\\([nrt()\\])")
_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "(": "(", ")": ")", "\\": "\\"}
_LETTER_RE = re.compile(r"[A-Za-z]")


def unescape_literal(raw: str) -> str:
    """Resolve the backslash escapes allowed inside a PDF literal string."""
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(1)], raw)


class LiteralStringScanner(BasePdfExtractor):
    """Harvests parenthesized literal strings straight from the file bytes."""

    name = "literal_scan"

    def extract(self, pdf_bytes: bytes) -> str:
        if not pdf_bytes.startswith(PDF_MAGIC):
            raise PdfExtractionError("Not a valid PDF file")

        content = pdf_bytes.decode("latin-1")
        runs: list[str] = []
        for match in _LITERAL_RE.finditer(content):
            text = unescape_literal(match.group(1))
            if len(text) > 2 and _LETTER_RE.search(text):
                runs.append(text)

        if not runs:
            raise PdfExtractionError("No text content found in PDF")
        return " ".join(runs).strip()
