import json
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from jobscope.analysis.example_client_adapter import ExampleClientAdapter
from jobscope.main import app

runner = CliRunner()

VALID_KEY = "sk-" + "a" * 40
JOB_REPLY = json.dumps(
    {
        "jobLocation": ["Berlin", "Remote"],
        "requiredSkills": ["Python"],
        "niceToHaveSkills": [],
        "match": 72,
        "missing": ["Kubernetes"],
        "summary": "Strong backend fit",
    }
)


@pytest.fixture()
def storage_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "storage.json"
    monkeypatch.setenv("STORAGE_BACKEND", "file")
    monkeypatch.setenv("STORAGE_PATH", str(path))
    monkeypatch.setenv("ANALYSIS_PROVIDER", "example")
    monkeypatch.setenv("KDF_ITERATIONS", "1000")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    return path


@pytest.fixture()
def listing_file(tmp_path: Path) -> Path:
    path = tmp_path / "listing.txt"
    path.write_text("Backend engineer in Berlin. Python required.", encoding="utf-8")
    return path


class TestApiKeyCommands:
    def test_rejects_malformed_key(self, storage_path: Path) -> None:
        result = runner.invoke(app, ["set-api-key", "sk-short"])
        assert result.exit_code == 1
        assert "too short" in result.output
        assert not storage_path.exists()

    def test_saves_key_encrypted(self, storage_path: Path) -> None:
        result = runner.invoke(app, ["set-api-key", VALID_KEY])
        assert result.exit_code == 0
        assert "API key saved" in result.output
        assert VALID_KEY not in storage_path.read_text(encoding="utf-8")

    def test_clear_key(self, storage_path: Path) -> None:
        runner.invoke(app, ["set-api-key", VALID_KEY])
        result = runner.invoke(app, ["clear-api-key"])
        assert result.exit_code == 0
        assert "openaiApiKey" not in json.loads(storage_path.read_text(encoding="utf-8"))


class TestResumeCommands:
    def test_show_without_resume(self, storage_path: Path) -> None:
        result = runner.invoke(app, ["show-resume"])
        assert result.exit_code == 1
        assert "No resume stored" in result.output

    def test_parse_then_show(
        self, storage_path: Path, tmp_path: Path, resume_pdf_bytes: bytes
    ) -> None:
        pdf_path = tmp_path / "cv.pdf"
        pdf_path.write_bytes(resume_pdf_bytes)

        parsed = runner.invoke(app, ["parse-resume", str(pdf_path)])
        assert parsed.exit_code == 0
        assert "Resume saved" in parsed.output

        shown = runner.invoke(app, ["show-resume"])
        assert shown.exit_code == 0
        assert "Example Candidate" in shown.output
        assert "Example Candidate" not in storage_path.read_text(encoding="utf-8")

    def test_parse_blank_pdf_fails(
        self, storage_path: Path, tmp_path: Path, empty_pdf_bytes: bytes
    ) -> None:
        pdf_path = tmp_path / "blank.pdf"
        pdf_path.write_bytes(empty_pdf_bytes)

        result = runner.invoke(app, ["parse-resume", str(pdf_path)])
        assert result.exit_code == 1
        assert "Could not extract text" in result.output

    def test_parse_missing_file(self, storage_path: Path, tmp_path: Path) -> None:
        result = runner.invoke(app, ["parse-resume", str(tmp_path / "missing.pdf")])
        assert result.exit_code != 0


class TestAnalyzeJobCommand:
    def test_prints_analysis(self, storage_path: Path, listing_file: Path) -> None:
        with patch(
            "jobscope.main.AnalysisFactory.create_client",
            return_value=ExampleClientAdapter(JOB_REPLY),
        ):
            result = runner.invoke(app, ["analyze-job", str(listing_file), "--no-match"])

        assert result.exit_code == 0
        assert "72%" in result.output
        assert "Berlin, Remote" in result.output

    def test_stores_and_reuses_results_by_url(
        self, storage_path: Path, listing_file: Path
    ) -> None:
        url = "https://jobs.example.com/1"
        with patch(
            "jobscope.main.AnalysisFactory.create_client",
            return_value=ExampleClientAdapter(JOB_REPLY),
        ):
            first = runner.invoke(app, ["analyze-job", str(listing_file), "--url", url])
        assert first.exit_code == 0
        stored = json.loads(storage_path.read_text(encoding="utf-8"))
        assert stored["pandaJobAnalyzerResults"][url]["match"] == 72

        with patch(
            "jobscope.main.AnalysisFactory.create_client",
            return_value=ExampleClientAdapter("not json"),
        ) as create_client:
            second = runner.invoke(app, ["analyze-job", str(listing_file), "-u", url])
        assert second.exit_code == 0
        assert "72%" in second.output
        create_client.assert_not_called()

    def test_unusable_reply_fails(self, storage_path: Path, listing_file: Path) -> None:
        with patch(
            "jobscope.main.AnalysisFactory.create_client",
            return_value=ExampleClientAdapter("not json"),
        ):
            result = runner.invoke(app, ["analyze-job", str(listing_file)])

        assert result.exit_code == 1
        assert "retry the analysis" in result.output

    def test_clear_results(self, storage_path: Path, listing_file: Path) -> None:
        with patch(
            "jobscope.main.AnalysisFactory.create_client",
            return_value=ExampleClientAdapter(JOB_REPLY),
        ):
            runner.invoke(app, ["analyze-job", str(listing_file), "-u", "https://x.test/1"])

        result = runner.invoke(app, ["clear-results"])
        assert result.exit_code == 0
        stored = json.loads(storage_path.read_text(encoding="utf-8"))
        assert "pandaJobAnalyzerResults" not in stored


class TestStorageFailures:
    def test_corrupt_storage_file_exits_with_message(self, storage_path: Path) -> None:
        storage_path.write_text("{not json", encoding="utf-8")

        result = runner.invoke(app, ["show-resume"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Local storage could not be read" in result.output

    @pytest.mark.parametrize("command", [
        ["set-api-key", VALID_KEY],
        ["clear-api-key"],
        ["clear-results"],
    ])
    def test_every_command_handles_corrupt_storage(
        self, storage_path: Path, command: list[str]
    ) -> None:
        storage_path.write_text("[1, 2]", encoding="utf-8")

        result = runner.invoke(app, command)

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)

    def test_stored_resume_failing_validation(self, storage_path: Path) -> None:
        legacy = {"pandaJobAnalyzerResume": {"name": "x", "title": "y"}}
        storage_path.write_text(json.dumps(legacy), encoding="utf-8")

        result = runner.invoke(app, ["show-resume"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "incomplete" in result.output

    def test_unreadable_stored_resume(self, storage_path: Path) -> None:
        storage_path.write_text(
            json.dumps({"pandaJobAnalyzerResume": "not json"}), encoding="utf-8"
        )

        result = runner.invoke(app, ["show-resume"])

        assert result.exit_code == 1
        assert "Local storage could not be read" in result.output


class TestExampleProvider:
    def test_analyze_job_offline(self, storage_path: Path, listing_file: Path) -> None:
        result = runner.invoke(app, ["analyze-job", str(listing_file), "--no-match"])

        assert result.exit_code == 0
        assert "Not specified" in result.output
