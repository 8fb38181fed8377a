from abc import ABC, abstractmethod
from dataclasses import dataclass

from jobscope.analysis.models import ResumeData
from jobscope.pdf.models import ExtractionSuccess, RawDocument


@dataclass(slots=True)
class PipelineContext:
    document: RawDocument
    extraction: ExtractionSuccess | None = None
    normalized_text: str = ""
    resume: ResumeData | None = None


class PipelineStep(ABC):
    @abstractmethod
    async def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
