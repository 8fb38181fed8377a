import httpx
import openai

from jobscope.analysis.client_base import BaseCompletionClient
from jobscope.analysis.exceptions import CompletionError, CompletionNetworkError

_QUOTA_MESSAGE = (
    "Your OpenAI account has run out of credits. "
    "Please add credits at https://platform.openai.com/account/billing"
)
_RATE_LIMIT_MESSAGE = "The AI service is rate limiting requests. Please wait a few minutes and try again."


class OpenAIClientAdapter(BaseCompletionClient):
    """Chat completion client built on the OpenAI-compatible async API.

    Retries with backoff on rate limits are left to the SDK (``max_retries``).
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        max_retries: int = 3,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=max_retries,
        )

    async def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except openai.RateLimitError as exc:
            quota = getattr(exc, "code", None) == "insufficient_quota"
            raise CompletionNetworkError(
                f"AI provider rate limit: {exc}",
                user_message=_QUOTA_MESSAGE if quota else _RATE_LIMIT_MESSAGE,
            ) from exc
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise CompletionNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise CompletionNetworkError(
                f"AI provider API error: {exc}"
            ) from exc

        if not response.choices:
            raise CompletionError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise CompletionError("AI returned empty response")
        return content
