from collections.abc import Sequence

from jobscope.analysis.factory import AnalysisFactory
from jobscope.analysis.models import ResumeData
from jobscope.config.settings import Settings
from jobscope.logging.logger import Log
from jobscope.pdf.extractor import build_text_extractor
from jobscope.pdf.models import RawDocument
from jobscope.processor.pipeline import PipelineContext, PipelineStep
from jobscope.processor.steps import (
    ExtractTextStep,
    NormalizeTextStep,
    ParseResumeStep,
    PersistResumeStep,
)
from jobscope.storage.service import StorageService
from jobscope.text.normalizer import TextNormalizer


class ResumeProcessor:
    """Orchestrates résumé processing.

    Pipeline: extract -> normalize -> parse (model + resolve + validate) -> persist.
    """

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = list(steps)

    async def process(self, document: RawDocument) -> ResumeData:
        """Run every step for *document* and return the persisted résumé."""
        Log.info(f"Processing {document.file_name} ({document.size} bytes)")
        context = PipelineContext(document=document)
        for step in self._steps:
            context = await step.run(context)
        if context.resume is None:
            raise ValueError("Pipeline finished without a resume")
        return context.resume


def build_processor(
    settings: Settings,
    *,
    storage: StorageService,
    api_key: str | None = None,
) -> ResumeProcessor:
    """Build a ResumeProcessor with all required adapters."""
    client = AnalysisFactory.create_client(settings, api_key)
    return ResumeProcessor(
        [
            ExtractTextStep(build_text_extractor(settings)),
            NormalizeTextStep(TextNormalizer(settings.max_normalized_length)),
            ParseResumeStep(AnalysisFactory.create_resume_parser(settings, client)),
            PersistResumeStep(storage),
        ]
    )
