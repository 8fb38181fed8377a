from unittest.mock import MagicMock, patch

import pytest

from jobscope.analysis.example_client_adapter import ExampleClientAdapter
from jobscope.analysis.exceptions import ConfigMissingError, InvalidApiKeyError
from jobscope.analysis.factory import AnalysisFactory
from jobscope.analysis.job_analyzer import JobAnalyzer
from jobscope.analysis.openai_client_adapter import OpenAIClientAdapter
from jobscope.analysis.resume_parser import ResumeParser
from jobscope.config.settings import Settings

VALID_KEY = "sk-" + "a" * 40
STORED_KEY = "sk-" + "b" * 40


def _settings(**overrides: object) -> Settings:
    defaults: dict[str, object] = {"analysis_provider": "openai", "openai_api_key": ""}
    defaults.update(overrides)
    return Settings(**defaults)  # type: ignore[arg-type]


class TestCreateClient:
    def test_example_provider(self) -> None:
        client = AnalysisFactory.create_client(_settings(analysis_provider="example"))
        assert isinstance(client, ExampleClientAdapter)

    @pytest.mark.asyncio
    async def test_example_provider_for_job_analysis(self) -> None:
        settings = _settings(analysis_provider="example")
        client = AnalysisFactory.create_client(settings, for_job_analysis=True)
        analyzer = AnalysisFactory.create_job_analyzer(settings, client)

        analysis = await analyzer.analyze("Backend engineer, Python required.")

        assert analysis.job_location == ["Not specified"]

    def test_provider_is_case_insensitive(self) -> None:
        client = AnalysisFactory.create_client(_settings(analysis_provider="Example"))
        assert isinstance(client, ExampleClientAdapter)

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown analysis provider"):
            AnalysisFactory.create_client(_settings(analysis_provider="nope"))

    def test_missing_key_raises(self) -> None:
        with pytest.raises(ConfigMissingError):
            AnalysisFactory.create_client(_settings())

    def test_malformed_key_raises(self) -> None:
        with pytest.raises(InvalidApiKeyError):
            AnalysisFactory.create_client(_settings(openai_api_key="not-a-key"))

    def test_openai_from_settings(self) -> None:
        settings = _settings(
            openai_api_key=VALID_KEY,
            openai_timeout_seconds=12,
            openai_base_url="http://localhost:8080/v1",
            openai_max_retries=5,
        )
        with patch(
            "jobscope.analysis.openai_client_adapter.openai.AsyncOpenAI",
            return_value=MagicMock(),
        ) as mock_cls:
            client = AnalysisFactory.create_client(settings)

        assert isinstance(client, OpenAIClientAdapter)
        mock_cls.assert_called_once_with(
            api_key=VALID_KEY,
            timeout=12,
            base_url="http://localhost:8080/v1",
            max_retries=5,
        )

    def test_stored_key_takes_precedence(self) -> None:
        with patch(
            "jobscope.analysis.openai_client_adapter.openai.AsyncOpenAI",
            return_value=MagicMock(),
        ) as mock_cls:
            AnalysisFactory.create_client(_settings(openai_api_key=VALID_KEY), STORED_KEY)

        assert mock_cls.call_args.kwargs["api_key"] == STORED_KEY


class TestCreateServices:
    def test_resume_parser(self) -> None:
        parser = AnalysisFactory.create_resume_parser(_settings(), ExampleClientAdapter())
        assert isinstance(parser, ResumeParser)

    def test_job_analyzer(self) -> None:
        analyzer = AnalysisFactory.create_job_analyzer(_settings(), ExampleClientAdapter())
        assert isinstance(analyzer, JobAnalyzer)
