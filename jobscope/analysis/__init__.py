from jobscope.analysis.exceptions import (
    AnalysisError,
    CompletionError,
    CompletionNetworkError,
    ConfigMissingError,
    ExtractionFailedError,
    InvalidApiKeyError,
    JsonUnrepairableError,
    RecordValidationError,
)
from jobscope.analysis.factory import AnalysisFactory
from jobscope.analysis.job_analyzer import JobAnalyzer
from jobscope.analysis.models import JobAnalysis, ResumeData
from jobscope.analysis.resume_parser import ResumeParser
from jobscope.analysis.validator import validate_api_key

__all__ = [
    "AnalysisError",
    "AnalysisFactory",
    "CompletionError",
    "CompletionNetworkError",
    "ConfigMissingError",
    "ExtractionFailedError",
    "InvalidApiKeyError",
    "JobAnalysis",
    "JobAnalyzer",
    "JsonUnrepairableError",
    "RecordValidationError",
    "ResumeData",
    "ResumeParser",
    "validate_api_key",
]
