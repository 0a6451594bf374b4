"""OpenAI completions client interface."""
from abc import ABC, abstractmethod

from openai_llm.client.models import OpenAICompletionModel


class BaseOpenAIClient(ABC):
    @abstractmethod
    async def create_completion(
        self,
        *,
        model: str,
        prompts: list[str],
        max_tokens: int | None = None,
        temperature: float | None = None,
        top_p: float | None = None,
        n: int | None = None,
        stop: list[str] | None = None,
        presence_penalty: float | None = None,
        frequency_penalty: float | None = None,
        best_of: int | None = None,
        logit_bias: dict[str, float] | None = None,
    ) -> OpenAICompletionModel:
        """Create completions for all prompts in one request."""
        ...
