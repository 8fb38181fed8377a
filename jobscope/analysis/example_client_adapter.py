"""Example completion client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseCompletionClient and register the provider in AnalysisFactory.
"""

import json
from typing import ClassVar

from jobscope.analysis.client_base import BaseCompletionClient


class ExampleClientAdapter(BaseCompletionClient):
    """Offline adapter that returns a fixed valid résumé record.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "personalInfo": {"name": "Example Candidate"},
        "summary": "Not Available",
        "experience": [],
        "education": [],
        "skills": {"technical": [], "soft": [], "languages": []},
        "projects": [],
        "certifications": [],
    }

    JOB_ANALYSIS_RESPONSE: ClassVar[dict[str, object]] = {
        "jobLocation": ["Not specified"],
        "requiredSkills": [],
        "niceToHaveSkills": [],
        "companySummary": "Not Available",
        "salaryRange": None,
        "summary": "Example analysis generated offline.",
    }

    def __init__(self, response: str | None = None) -> None:
        self._response = response

    @classmethod
    def for_job_analysis(cls) -> "ExampleClientAdapter":
        return cls(json.dumps(cls.JOB_ANALYSIS_RESPONSE))

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt
        if self._response is not None:
            return self._response
        return json.dumps(self.DEFAULT_RESPONSE)
