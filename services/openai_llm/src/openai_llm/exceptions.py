"""Errors raised by the OpenAI client and LLM adapter."""


class OpenAILLMError(Exception):
    """Base error for this package."""


class OpenAIClientError(OpenAILLMError):
    """The completions API answered with an error status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        error_type: str | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.code = code

    def __str__(self) -> str:
        return f"OpenAI API error {self.status_code}: {self.message}"


class OpenAIResponseError(OpenAILLMError):
    """The API response cannot be mapped onto the requested prompts."""
