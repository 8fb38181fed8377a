"""Validates decoded model records and user input against domain invariants."""

import re
from typing import Any

from jobscope.analysis.exceptions import InvalidApiKeyError, RecordValidationError
from jobscope.analysis.models import (
    Education,
    Experience,
    JobAnalysis,
    PersonalInfo,
    ResumeData,
    SalaryRange,
    Skills,
)

API_KEY_PREFIX = "sk-"
API_KEY_MIN_LENGTH = 20
API_KEY_MAX_LENGTH = 200
MAX_JOB_CONTENT_LENGTH = 10_000
MATCH_MIN = 1
MATCH_MAX = 100

_API_KEY_BODY_RE = re.compile(r"^[A-Za-z0-9+/=_-]+$")


def validate_api_key(api_key: Any) -> str:
    """Return *api_key* unchanged when valid, else raise listing every problem.

    Raises:
        InvalidApiKeyError: when the key is missing or malformed.
    """
    if not api_key or not isinstance(api_key, str):
        raise InvalidApiKeyError(
            "API key is required", user_message="API key is required"
        )
    errors: list[str] = []
    if len(api_key) < API_KEY_MIN_LENGTH:
        errors.append("API key is too short")
    if len(api_key) > API_KEY_MAX_LENGTH:
        errors.append("API key is too long")
    if not api_key.startswith(API_KEY_PREFIX):
        errors.append(f'API key must start with "{API_KEY_PREFIX}"')
    if " " in api_key:
        errors.append("API key cannot contain spaces")
    elif not _API_KEY_BODY_RE.match(api_key[len(API_KEY_PREFIX):]):
        errors.append("API key contains invalid characters")
    if errors:
        message = "; ".join(errors)
        raise InvalidApiKeyError(message, user_message=message)
    return api_key


def validate_job_content(content: Any, max_length: int = MAX_JOB_CONTENT_LENGTH) -> str:
    if not content or not isinstance(content, str) or not content.strip():
        raise RecordValidationError(
            "Job listing text is required",
            user_message="Job listing text is required",
        )
    if len(content) > max_length:
        message = (
            f"Text length {len(content)} exceeds maximum allowed length of {max_length}"
        )
        raise RecordValidationError(message, user_message=message)
    return content


def validate_resume(data: dict[str, Any]) -> ResumeData:
    """Validate a decoded résumé record and build ResumeData.

    Raises:
        RecordValidationError: on any validation failure.
    """
    if not isinstance(data, dict):
        raise RecordValidationError("Resume data must be an object")
    personal_info = _build_personal_info(data.get("personalInfo"))
    experience = _require_list(data, "experience")
    education = _require_list(data, "education")
    skills = data.get("skills")
    if not isinstance(skills, dict):
        raise RecordValidationError("'skills' must be an object")

    return ResumeData(
        personal_info=personal_info,
        experience=[_build_experience(item, i) for i, item in enumerate(experience)],
        education=[_build_education(item, i) for i, item in enumerate(education)],
        skills=Skills(
            technical=_string_list(skills.get("technical")),
            soft=_string_list(skills.get("soft")),
            languages=_string_list(skills.get("languages")),
        ),
        summary=_optional_str(data.get("summary")),
        uploaded_at=_optional_str(data.get("uploadedAt")),
        file_name=_optional_str(data.get("fileName")),
        record=data,
    )


def validate_job_analysis(data: dict[str, Any]) -> JobAnalysis:
    """Validate a decoded job analysis record and build JobAnalysis.

    ``jobLocation`` is coerced to a list and ``match`` to an integer within
    1..100; the returned record carries the coerced values.

    Raises:
        RecordValidationError: on any validation failure.
    """
    if not isinstance(data, dict):
        raise RecordValidationError("Results must be an object")
    for required in ("jobLocation", "requiredSkills"):
        if required not in data:
            raise RecordValidationError(f"Missing required field: {required}")

    record = dict(data)
    record["jobLocation"] = _coerce_location(data["jobLocation"])
    for name in ("requiredSkills", "niceToHaveSkills", "missing"):
        if name in data and not isinstance(data[name], list):
            raise RecordValidationError(f"'{name}' must be a list")
    if data.get("match") is not None:
        record["match"] = _coerce_match(data["match"])

    return JobAnalysis(
        job_location=record["jobLocation"],
        required_skills=_string_list(record["requiredSkills"]),
        nice_to_have_skills=_string_list(record.get("niceToHaveSkills")),
        company_summary=_optional_str(record.get("companySummary")),
        company_reviews=_optional_str(record.get("companyReviews")),
        salary_range=_build_salary_range(record.get("salaryRange")),
        match=record.get("match"),
        missing=_string_list(record.get("missing")),
        summary=_optional_str(record.get("summary")),
        record=record,
    )


def _build_personal_info(raw: Any) -> PersonalInfo:
    if not isinstance(raw, dict):
        raise RecordValidationError("'personalInfo' must be an object")
    name = raw.get("name")
    if not name or not isinstance(name, str):
        raise RecordValidationError("'personalInfo.name' must be a non-empty string")
    return PersonalInfo(
        name=name,
        email=_optional_str(raw.get("email")),
        phone=_optional_str(raw.get("phone")),
        location=_optional_str(raw.get("location")),
        linkedin=_optional_str(raw.get("linkedin")),
        github=_optional_str(raw.get("github")),
        website=_optional_str(raw.get("website")),
    )


def _require_list(data: dict[str, Any], name: str) -> list[Any]:
    value = data.get(name)
    if not isinstance(value, list):
        raise RecordValidationError(f"'{name}' must be a list")
    return value


def _build_experience(raw: Any, index: int) -> Experience:
    if not isinstance(raw, dict):
        raise RecordValidationError(f"experience[{index}] must be an object")
    return Experience(
        company=_optional_str(raw.get("company")) or "",
        position=_optional_str(raw.get("position")) or "",
        start=_optional_str(raw.get("from")),
        end=_optional_str(raw.get("to")),
        description=_optional_str(raw.get("description")) or "",
        achievements=_string_list(raw.get("achievements")),
        technologies=_string_list(raw.get("technologies")),
    )


def _build_education(raw: Any, index: int) -> Education:
    if not isinstance(raw, dict):
        raise RecordValidationError(f"education[{index}] must be an object")
    return Education(
        institution=_optional_str(raw.get("institution")) or "",
        degree=_optional_str(raw.get("degree")) or "",
        field_of_study=_optional_str(raw.get("fieldOfStudy")),
        graduation_year=_optional_str(raw.get("graduationYear")),
        gpa=_optional_str(raw.get("gpa")),
    )


def _build_salary_range(raw: Any) -> SalaryRange | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise RecordValidationError("'salaryRange' must be an object or null")
    return SalaryRange(min=_optional_str(raw.get("min")), max=_optional_str(raw.get("max")))


def _coerce_location(raw: Any) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        return [raw] if raw.strip() else []
    if isinstance(raw, list):
        return [str(item) for item in raw if item is not None]
    raise RecordValidationError("'jobLocation' must be a string or a list")


def _coerce_match(raw: Any) -> int:
    if isinstance(raw, bool):
        raise RecordValidationError("'match' must be a number")
    try:
        value = round(float(raw))
    except (TypeError, ValueError, OverflowError) as exc:
        raise RecordValidationError(f"'match' must be a number, got {raw!r}") from exc
    return max(MATCH_MIN, min(MATCH_MAX, value))


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value if isinstance(value, str) else None


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]
