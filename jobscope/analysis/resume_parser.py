"""AI-powered résumé parser."""

from pathlib import Path

from jobscope.analysis.client_base import BaseCompletionClient
from jobscope.analysis.exceptions import JsonUnrepairableError
from jobscope.analysis.models import ResumeData
from jobscope.analysis.prompt_loader import resume_prompts
from jobscope.analysis.sanitizer import sanitize_record
from jobscope.analysis.validator import validate_resume
from jobscope.logging.logger import Log
from jobscope.resolver import StructuredRecord, StructuredResponseResolver


class ResumeParser:
    """Turns normalized résumé text into a validated ResumeData record."""

    def __init__(
        self,
        *,
        client: BaseCompletionClient,
        model: str,
        temperature: float = 0.0,
        resolver: StructuredResponseResolver | None = None,
        prompt_dir: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._resolver = resolver or StructuredResponseResolver()
        self._prompt_dir = prompt_dir

    async def parse(self, text: str, file_name: str) -> ResumeData:
        system_prompt, user_prompt = resume_prompts(text, file_name, self._prompt_dir)
        Log.info(f"Parsing resume {file_name} ({len(text)} chars)")

        reply = await self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=system_prompt,
            user_prompt=user_prompt,
        )
        Log.debug(f"AI raw response:\n{reply}")

        resolved = self._resolver.resolve(reply, source=file_name)
        if not isinstance(resolved, StructuredRecord):
            raise JsonUnrepairableError(f"Failed to parse resume data: {resolved.reason}")
        if resolved.repaired:
            Log.warning(f"Resume reply for {file_name} needed JSON repair")

        resume = validate_resume(sanitize_record(resolved.data))
        Log.info(
            f"Resume parsed: {len(resume.experience)} experience entries, "
            f"{len(resume.education)} education entries"
        )
        return resume
