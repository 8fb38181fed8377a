class AnalysisError(Exception):
    """Base for every pipeline failure that reaches the user.

    ``user_message`` is safe to show as-is; the exception text carries the
    technical detail for logs.
    """

    user_message = "Something went wrong. Please try again."

    def __init__(self, message: str, *, user_message: str | None = None) -> None:
        super().__init__(message)
        if user_message is not None:
            self.user_message = user_message


class ExtractionFailedError(AnalysisError):
    """Raised when no text could be extracted or the document was rejected."""

    user_message = "Could not read this file. Please provide a different PDF file."


class JsonUnrepairableError(AnalysisError):
    """Raised when the model reply holds no usable JSON object."""

    user_message = "The analysis response could not be read. Please retry the analysis."


class ConfigMissingError(AnalysisError):
    """Raised when no API key is configured."""

    user_message = "No OpenAI API key is configured. Please set your API key first."


class InvalidApiKeyError(AnalysisError):
    """Raised when an API key fails format validation."""

    user_message = "The API key format is invalid. Please check your API key."


class RecordValidationError(AnalysisError):
    """Raised when a decoded record fails domain validation."""

    user_message = "The analysis result was incomplete. Please retry the analysis."


class CompletionError(AnalysisError):
    """Raised when the model provider returns an unusable reply."""

    user_message = "The AI service returned an empty response. Please retry the analysis."


class CompletionNetworkError(CompletionError):
    """Raised when the provider call fails due to network/infrastructure issues."""

    user_message = "Could not reach the AI service. Please check your connection and try again."
