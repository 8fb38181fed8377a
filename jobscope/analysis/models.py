from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class PersonalInfo:
    """Contact details of the candidate."""

    name: str
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    linkedin: str | None = None
    github: str | None = None
    website: str | None = None


@dataclass(frozen=True)
class Experience:
    company: str = ""
    position: str = ""
    start: str | None = None
    end: str | None = None
    description: str = ""
    achievements: list[str] = field(default_factory=list)
    technologies: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Education:
    institution: str = ""
    degree: str = ""
    field_of_study: str | None = None
    graduation_year: str | None = None
    gpa: str | None = None


@dataclass(frozen=True)
class Skills:
    technical: list[str] = field(default_factory=list)
    soft: list[str] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ResumeData:
    """Validated résumé record.

    ``record`` holds the sanitized JSON object exactly as it is persisted,
    including any fields the typed view does not model.
    """

    personal_info: PersonalInfo
    experience: list[Experience]
    education: list[Education]
    skills: Skills
    summary: str | None = None
    uploaded_at: str | None = None
    file_name: str | None = None
    record: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return dict(self.record)


@dataclass(frozen=True)
class SalaryRange:
    min: str | None = None
    max: str | None = None


@dataclass(frozen=True)
class JobAnalysis:
    """Validated job listing analysis, optionally matched against a résumé."""

    job_location: list[str]
    required_skills: list[str]
    nice_to_have_skills: list[str] = field(default_factory=list)
    company_summary: str | None = None
    company_reviews: str | None = None
    salary_range: SalaryRange | None = None
    match: int | None = None
    missing: list[str] = field(default_factory=list)
    summary: str | None = None
    record: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return dict(self.record)
