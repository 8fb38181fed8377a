"""AI-powered job listing analysis with optional résumé matching."""

import hashlib
import json
from pathlib import Path
from typing import Any

from jobscope.analysis.cache import TtlCache
from jobscope.analysis.client_base import BaseCompletionClient
from jobscope.analysis.exceptions import JsonUnrepairableError
from jobscope.analysis.models import JobAnalysis, ResumeData
from jobscope.analysis.prompt_loader import job_prompts
from jobscope.analysis.validator import validate_job_analysis, validate_job_content
from jobscope.logging.logger import Log
from jobscope.resolver import StructuredRecord, StructuredResponseResolver

CACHE_TTL_SECONDS = 60 * 60
MAX_RESUME_PROMPT_CHARS = 15_000


class JobAnalyzer:
    """Extracts key facts from a job listing and scores it against a résumé.

    Results are cached in memory per (listing, résumé) pair for
    ``cache_ttl_seconds``.
    """

    def __init__(
        self,
        *,
        client: BaseCompletionClient,
        model: str,
        temperature: float = 0.0,
        resolver: StructuredResponseResolver | None = None,
        cache: TtlCache[JobAnalysis] | None = None,
        cache_ttl_seconds: int = CACHE_TTL_SECONDS,
        max_resume_chars: int = MAX_RESUME_PROMPT_CHARS,
        prompt_dir: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._resolver = resolver or StructuredResponseResolver()
        self._cache = cache if cache is not None else TtlCache(cache_ttl_seconds)
        self._max_resume_chars = max_resume_chars
        self._prompt_dir = prompt_dir

    async def analyze(
        self,
        content: str,
        resume: ResumeData | dict[str, Any] | None = None,
    ) -> JobAnalysis:
        validate_job_content(content)
        resume_json = self._resume_json(resume)

        cache_key = self._cache_key(content, resume_json)
        cached = self._cache.get(cache_key)
        if cached is not None:
            Log.info("Using cached job analysis")
            return cached

        if resume_json is not None and len(resume_json) > self._max_resume_chars:
            Log.warning(
                f"Resume too large ({len(resume_json)} chars), analyzing without matching"
            )
            resume_json = None

        system_prompt, user_prompt = job_prompts(content, resume_json, self._prompt_dir)
        Log.info(
            f"Analyzing job listing ({len(content)} chars, "
            f"matching={'yes' if resume_json is not None else 'no'})"
        )
        reply = await self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=system_prompt,
            user_prompt=user_prompt,
        )
        Log.debug(f"AI raw response:\n{reply}")

        resolved = self._resolver.resolve(reply)
        if not isinstance(resolved, StructuredRecord):
            raise JsonUnrepairableError(f"Failed to parse job analysis: {resolved.reason}")

        analysis = validate_job_analysis(resolved.data)
        self._cache.set(cache_key, analysis)
        return analysis

    @staticmethod
    def _resume_json(resume: ResumeData | dict[str, Any] | None) -> str | None:
        if resume is None:
            return None
        record = resume.to_dict() if isinstance(resume, ResumeData) else resume
        return json.dumps(record, ensure_ascii=False, sort_keys=True)

    @staticmethod
    def _cache_key(content: str, resume_json: str | None) -> str:
        digest = hashlib.sha256()
        digest.update(content.encode("utf-8"))
        digest.update(b"\x00")
        digest.update((resume_json or "no-resume").encode("utf-8"))
        return digest.hexdigest()
