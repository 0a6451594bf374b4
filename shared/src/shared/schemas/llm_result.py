"""Provider-independent result of an LLM generation call."""
from typing import Any

from pydantic import BaseModel, Field


class Generation(BaseModel):
    """One generated candidate for a prompt."""

    text: str
    # Provider-specific extras (finish reason, log probabilities, ...)
    generation_info: dict[str, Any] | None = None


class LLMResult(BaseModel):
    """All candidates of one generate() call.

    ``generations[i]`` holds the candidates produced for the i-th prompt.
    ``llm_output`` carries provider-level data such as token usage and model name.
    """

    generations: list[list[Generation]] = Field(default_factory=list)
    llm_output: dict[str, Any] | None = None

    def first_text(self, prompt_index: int = 0) -> str:
        """Text of the first candidate generated for a prompt."""
        return self.generations[prompt_index][0].text
