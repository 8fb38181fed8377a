import re
from dataclasses import dataclass, field

PDF_MIME_TYPE = "application/pdf"


@dataclass(frozen=True)
class RawDocument:
    """Uploaded document bytes with the metadata declared by the source."""

    content: bytes
    mime_type: str
    file_name: str

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class DocumentMetadata:
    file_size: int
    file_name: str
    page_count: int | None = None


@dataclass(frozen=True)
class ExtractionSuccess:
    """Text produced by the winning strategy."""

    text: str
    strategy_used: str
    metadata: DocumentMetadata | None = None


@dataclass(frozen=True)
class ExtractionFailure:
    """Terminal outcome: the caller must ask for a different file."""

    reason: str
    attempts: list[str] = field(default_factory=list)


ExtractionOutcome = ExtractionSuccess | ExtractionFailure


def generate_safe_file_name(original_name: str) -> str:
    """Make a file name safe for storage and force a .pdf extension."""
    safe_name = re.sub(r"[^a-zA-Z0-9.-]", "_", original_name)
    safe_name = re.sub(r"_{2,}", "_", safe_name).lower()
    if not safe_name.endswith(".pdf"):
        return safe_name + ".pdf"
    return safe_name


def format_file_size(size: int) -> str:
    if size <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    exponent = 0
    while exponent < len(units) - 1 and size >= 1024 ** (exponent + 1):
        exponent += 1
    value = round(size / 1024**exponent, 2)
    return f"{value:g} {units[exponent]}"
