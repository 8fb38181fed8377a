from pathlib import Path

from jobscope.analysis.exceptions import AnalysisError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"

RESUME_SYSTEM_PROMPT = "resume_system_prompt.txt"
RESUME_USER_PROMPT = "resume_user_prompt.txt"
JOB_SYSTEM_PROMPT = "job_system_prompt.txt"
JOB_MATCH_SYSTEM_PROMPT = "job_match_system_prompt.txt"
JOB_USER_PROMPT = "job_user_prompt.txt"
JOB_MATCH_USER_PROMPT = "job_match_user_prompt.txt"


def load_prompt(name: str, prompt_dir: Path | None = None) -> str:
    """Load a bundled prompt template by file name.

    Args:
        name: File name inside the prompt directory.
        prompt_dir: Directory to read from. Defaults to the bundled prompts.

    Returns:
        The raw template string with placeholders.

    Raises:
        AnalysisError: if the file cannot be read.
    """
    path = (prompt_dir or _DEFAULT_PROMPT_DIR) / name
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise AnalysisError(f"Failed to load prompt template {name}: {exc}") from exc


def resume_prompts(text: str, file_name: str, prompt_dir: Path | None = None) -> tuple[str, str]:
    """System and user prompt for parsing a résumé."""
    system_prompt = load_prompt(RESUME_SYSTEM_PROMPT, prompt_dir)
    user_prompt = load_prompt(RESUME_USER_PROMPT, prompt_dir).format(
        file_name=file_name,
        resume_text=text,
    )
    return system_prompt, user_prompt


def job_prompts(
    content: str,
    resume_json: str | None = None,
    prompt_dir: Path | None = None,
) -> tuple[str, str]:
    """System and user prompt for a job listing, with matching when *resume_json* is given."""
    if resume_json is None:
        system_prompt = load_prompt(JOB_SYSTEM_PROMPT, prompt_dir)
        user_prompt = load_prompt(JOB_USER_PROMPT, prompt_dir).format(content=content)
        return system_prompt, user_prompt
    system_prompt = load_prompt(JOB_MATCH_SYSTEM_PROMPT, prompt_dir)
    user_prompt = load_prompt(JOB_MATCH_USER_PROMPT, prompt_dir).format(
        content=content,
        resume_data=resume_json,
    )
    return system_prompt, user_prompt
