from jobscope.analysis.client_base import BaseCompletionClient
from jobscope.analysis.example_client_adapter import ExampleClientAdapter
from jobscope.analysis.exceptions import ConfigMissingError
from jobscope.analysis.job_analyzer import JobAnalyzer
from jobscope.analysis.openai_client_adapter import OpenAIClientAdapter
from jobscope.analysis.resume_parser import ResumeParser
from jobscope.analysis.validator import validate_api_key
from jobscope.config.settings import Settings
from jobscope.resolver import StructuredResponseResolver


class AnalysisFactory:
    """Creates completion clients and the services built on them."""

    PROVIDERS = ("example", "openai")

    @classmethod
    def create_client(
        cls,
        settings: Settings,
        api_key: str | None = None,
        *,
        for_job_analysis: bool = False,
    ) -> BaseCompletionClient:
        """Create the configured client.

        *api_key* (usually the one stored in the vault) takes precedence over
        ``openai_api_key`` from the environment. *for_job_analysis* only
        changes the fixed reply of the offline ``example`` provider.
        """
        provider = settings.analysis_provider.lower()
        if provider == "example":
            if for_job_analysis:
                return ExampleClientAdapter.for_job_analysis()
            return ExampleClientAdapter()
        if provider != "openai":
            raise ValueError(
                f"Unknown analysis provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
            )
        key = api_key or settings.openai_api_key
        if not key:
            raise ConfigMissingError("No OpenAI API key configured")
        return OpenAIClientAdapter(
            api_key=validate_api_key(key),
            timeout_seconds=settings.openai_timeout_seconds,
            base_url=settings.openai_base_url,
            max_retries=settings.openai_max_retries,
        )

    @classmethod
    def create_resume_parser(cls, settings: Settings, client: BaseCompletionClient) -> ResumeParser:
        return ResumeParser(
            client=client,
            model=settings.openai_model_name,
            temperature=settings.openai_temperature,
            resolver=StructuredResponseResolver(max_json_chars=settings.max_json_chars),
        )

    @classmethod
    def create_job_analyzer(cls, settings: Settings, client: BaseCompletionClient) -> JobAnalyzer:
        return JobAnalyzer(
            client=client,
            model=settings.openai_model_name,
            temperature=settings.openai_temperature,
            resolver=StructuredResponseResolver(max_json_chars=settings.max_json_chars),
            cache_ttl_seconds=settings.analysis_cache_ttl_seconds,
            max_resume_chars=settings.max_resume_prompt_chars,
        )
