import base64
import binascii
import re
import zlib

from jobscope.pdf.base import BasePdfExtractor
from jobscope.pdf.exceptions import PdfExtractionError
from jobscope.pdf.literal_scan import unescape_literal

_STREAM_RE = re.compile(rb"stream\r?\n(.*?)\r?\n?endstream", re.DOTALL)
_LITERAL_RE = re.compile(r"\(([^)]*)\)")
_HEX_RE = re.compile(r"<([0-9A-Fa-f\s]+)>")
_ALNUM_RE = re.compile(r"[A-Za-z0-9]")
_LETTER_RE = re.compile(r"[A-Za-z]")


def hex_to_text(hex_run: str) -> str:
    """Decode hex pairs, keeping only printable ASCII (32-126)."""
    digits = "".join(hex_run.split())
    if len(digits) % 2 != 0:
        return ""
    chars = []
    for i in range(0, len(digits), 2):
        code = int(digits[i : i + 2], 16)
        if 32 <= code <= 126:
            chars.append(chr(code))
    return "".join(chars)


def decode_stream(raw: bytes) -> bytes:
    """Undo ASCII85 and Flate encodings when present, else return raw bytes."""
    data = raw
    stripped = raw.strip()
    if stripped.endswith(b"~>"):
        try:
            data = base64.a85decode(stripped[:-2])
        except (ValueError, binascii.Error):
            data = raw
    try:
        return zlib.decompressobj().decompress(data)
    except zlib.error:
        return data


def readable_text(content: str) -> str:
    parts: list[str] = []
    for match in _LITERAL_RE.finditer(content):
        text = unescape_literal(match.group(1))
        if len(text) > 1 and _ALNUM_RE.search(text):
            parts.append(text)
    for match in _HEX_RE.finditer(content):
        decoded = hex_to_text(match.group(1))
        if decoded and _LETTER_RE.search(decoded):
            parts.append(decoded)
    return " ".join(parts).strip()


class StreamPatternScanner(BasePdfExtractor):
    """Harvests literal and hex strings from stream ... endstream regions."""

    name = "stream_scan"

    def extract(self, pdf_bytes: bytes) -> str:
        streams = _STREAM_RE.findall(pdf_bytes)
        if not streams:
            raise PdfExtractionError("No text streams found")

        chunks = []
        for raw in streams:
            text = readable_text(decode_stream(raw).decode("latin-1"))
            if text:
                chunks.append(text)

        if not chunks:
            raise PdfExtractionError("No readable text found in streams")
        return " ".join(chunks).strip()
