from jobscope.analysis.exceptions import ExtractionFailedError
from jobscope.analysis.resume_parser import ResumeParser
from jobscope.logging.logger import Log
from jobscope.pdf.extractor import TextExtractor
from jobscope.pdf.models import ExtractionFailure
from jobscope.processor.pipeline import PipelineContext, PipelineStep
from jobscope.storage.service import StorageService
from jobscope.text.normalizer import TextNormalizer


class ExtractTextStep(PipelineStep):
    def __init__(self, extractor: TextExtractor) -> None:
        self._extractor = extractor

    async def run(self, context: PipelineContext) -> PipelineContext:
        outcome = await self._extractor.extract(context.document)
        if isinstance(outcome, ExtractionFailure):
            raise ExtractionFailedError(
                f"Extraction failed for {context.document.file_name}: "
                f"{outcome.reason} ({'; '.join(outcome.attempts) or 'no attempts'})",
                user_message=outcome.reason,
            )
        context.extraction = outcome
        Log.info(
            f"Extracted {len(outcome.text)} chars from {context.document.file_name} "
            f"using {outcome.strategy_used}"
        )
        return context


class NormalizeTextStep(PipelineStep):
    def __init__(self, normalizer: TextNormalizer) -> None:
        self._normalizer = normalizer

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction is None:
            raise ValueError("PipelineContext.extraction must be set before normalization")
        context.normalized_text = self._normalizer.normalize(context.extraction.text)
        Log.info(f"Normalized text to {len(context.normalized_text)} chars")
        return context


class ParseResumeStep(PipelineStep):
    def __init__(self, parser: ResumeParser) -> None:
        self._parser = parser

    async def run(self, context: PipelineContext) -> PipelineContext:
        if not context.normalized_text:
            raise ValueError("PipelineContext.normalized_text must be set before parsing")
        context.resume = await self._parser.parse(
            context.normalized_text, context.document.file_name
        )
        return context


class PersistResumeStep(PipelineStep):
    def __init__(self, storage: StorageService) -> None:
        self._storage = storage

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.resume is None:
            raise ValueError("PipelineContext.resume must be set before persist")
        await self._storage.save_resume_data(context.resume.to_dict())
        Log.info(f"Saved resume data for {context.document.file_name}")
        return context
