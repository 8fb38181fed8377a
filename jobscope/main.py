"""
Command-line interface for jobscope.

Parses résumé PDFs into structured records, keeps the API key and résumé in
the encrypted vault, and analyzes job listings against the stored résumé.
"""

import asyncio
import mimetypes
from collections.abc import AsyncIterator, Coroutine
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, NoReturn, Optional, TypeVar

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from jobscope.analysis.exceptions import AnalysisError
from jobscope.analysis.factory import AnalysisFactory
from jobscope.analysis.models import JobAnalysis, ResumeData
from jobscope.analysis.validator import (
    validate_api_key,
    validate_job_analysis,
    validate_resume,
)
from jobscope.config.settings import Settings
from jobscope.logging.logger import Log
from jobscope.pdf.models import PDF_MIME_TYPE, RawDocument
from jobscope.processor.processor import build_processor
from jobscope.storage.exceptions import StorageError
from jobscope.storage.factory import KeyValueStoreFactory
from jobscope.storage.service import StorageService
from jobscope.vault.factory import VaultFactory

app = typer.Typer(
    name="jobscope",
    help="Résumé parsing and job listing analysis",
    add_completion=False,
)
console = Console()

T = TypeVar("T")


@app.callback()
def configure() -> None:
    """Configure logging before any command runs."""
    Log.configure(Settings().log_level)


@asynccontextmanager
async def open_storage(settings: Settings) -> AsyncIterator[StorageService]:
    store = KeyValueStoreFactory.create(settings)
    await store.open()
    try:
        yield StorageService(store, VaultFactory.create(settings, store))
    finally:
        await store.close()


def _read_document(path: Path) -> RawDocument:
    mime_type = PDF_MIME_TYPE if path.suffix.lower() == ".pdf" else (
        mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    )
    return RawDocument(content=path.read_bytes(), mime_type=mime_type, file_name=path.name)


def _fail(message: str) -> NoReturn:
    console.print(f"[red]✗[/red] {message}")
    raise typer.Exit(1)


def _run(coro: Coroutine[Any, Any, T], action: str) -> T:
    """Run *coro*; pipeline and storage failures exit with their user message."""
    try:
        return asyncio.run(coro)
    except (AnalysisError, StorageError) as exc:
        Log.error(f"{action} failed: {exc}")
        _fail(exc.user_message)


def _resume_table(resume: ResumeData) -> Table:
    table = Table(title=resume.personal_info.name, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    info = resume.personal_info
    for label, value in (
        ("Email", info.email),
        ("Phone", info.phone),
        ("Location", info.location),
        ("File", resume.file_name),
        ("Uploaded", resume.uploaded_at),
    ):
        if value:
            table.add_row(label, value)
    for job in resume.experience:
        period = f"{job.start or '?'} - {job.end or '?'}"
        table.add_row("Experience", f"{job.position} at {job.company} ({period})")
    for school in resume.education:
        table.add_row("Education", f"{school.degree}, {school.institution}")
    if resume.skills.technical:
        table.add_row("Skills", ", ".join(resume.skills.technical))
    return table


def _analysis_table(analysis: JobAnalysis) -> Table:
    table = Table(title="Job analysis", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    if analysis.match is not None:
        table.add_row("Match", f"{analysis.match}%")
    table.add_row("Location", ", ".join(analysis.job_location) or "Not specified")
    table.add_row("Required skills", ", ".join(analysis.required_skills))
    if analysis.nice_to_have_skills:
        table.add_row("Nice to have", ", ".join(analysis.nice_to_have_skills))
    if analysis.salary_range is not None:
        table.add_row(
            "Salary",
            f"{analysis.salary_range.min or '?'} - {analysis.salary_range.max or '?'}",
        )
    if analysis.company_summary:
        table.add_row("Company", analysis.company_summary)
    if analysis.missing:
        table.add_row("Missing", ", ".join(analysis.missing))
    if analysis.summary:
        table.add_row("Summary", analysis.summary)
    return table


@app.command("parse-resume")
def parse_resume(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Résumé PDF"),
):
    """Extract, parse and store a résumé."""

    async def _parse() -> ResumeData:
        settings = Settings()
        async with open_storage(settings) as storage:
            processor = build_processor(
                settings,
                storage=storage,
                api_key=await storage.get_api_key(),
            )
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
            ) as progress:
                progress.add_task(f"Parsing {path.name}...", total=None)
                return await processor.process(_read_document(path))

    resume = _run(_parse(), "Resume parsing")
    console.print(_resume_table(resume))
    console.print("[green]✓[/green] Resume saved")


@app.command("show-resume")
def show_resume():
    """Show the stored résumé."""

    async def _load() -> ResumeData | None:
        async with open_storage(Settings()) as storage:
            data = await storage.get_resume_data()
        return validate_resume(data) if data is not None else None

    resume = _run(_load(), "Loading resume")
    if resume is None:
        _fail("No resume stored. Run 'jobscope parse-resume PATH' first.")
    console.print(_resume_table(resume))


@app.command("set-api-key")
def set_api_key(
    key: str = typer.Argument(..., help="OpenAI API key"),
):
    """Validate and store the OpenAI API key."""
    try:
        validate_api_key(key)
    except AnalysisError as exc:
        _fail(exc.user_message)

    async def _save() -> None:
        async with open_storage(Settings()) as storage:
            await storage.save_api_key(key)

    _run(_save(), "Saving API key")
    console.print("[green]✓[/green] API key saved")


@app.command("clear-api-key")
def clear_api_key():
    """Remove the stored OpenAI API key."""

    async def _clear() -> None:
        async with open_storage(Settings()) as storage:
            await storage.delete_api_key()

    _run(_clear(), "Removing API key")
    console.print("[green]✓[/green] API key removed")


@app.command("analyze-job")
def analyze_job(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Job listing text file"),
    url: Optional[str] = typer.Option(
        None,
        "--url",
        "-u",
        help="Listing URL; results are cached under it",
    ),
    match: bool = typer.Option(
        True,
        "--match/--no-match",
        help="Score the listing against the stored résumé",
    ),
):
    """Analyze a job listing, optionally matching it against the stored résumé."""

    async def _analyze() -> JobAnalysis:
        settings = Settings()
        async with open_storage(settings) as storage:
            if url:
                cached = await storage.get_results(url)
                if cached is not None:
                    Log.info(f"Using stored results for {url}")
                    return validate_job_analysis(cached)
            client = AnalysisFactory.create_client(
                settings,
                await storage.get_api_key(),
                for_job_analysis=True,
            )
            analyzer = AnalysisFactory.create_job_analyzer(settings, client)
            resume = await storage.get_resume_data() if match else None
            analysis = await analyzer.analyze(path.read_text(encoding="utf-8"), resume)
            if url:
                await storage.save_results(url, analysis.to_dict())
            return analysis

    console.print(_analysis_table(_run(_analyze(), "Job analysis")))


@app.command("clear-results")
def clear_results():
    """Remove all cached job analysis results."""

    async def _clear() -> None:
        async with open_storage(Settings()) as storage:
            await storage.clear_all_results()

    _run(_clear(), "Clearing results")
    console.print("[green]✓[/green] Cached results removed")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
