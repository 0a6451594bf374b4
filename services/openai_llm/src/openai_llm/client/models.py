"""Request and response models of the legacy completions endpoint."""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class OpenAICompletionLogprobs(BaseModel):
    model_config = ConfigDict(extra="ignore")

    tokens: list[str] | None = None
    token_logprobs: list[float | None] | None = None
    top_logprobs: list[dict[str, float] | None] | None = None
    text_offset: list[int] | None = None


class OpenAICompletionChoice(BaseModel):
    """One generated candidate. ``index`` is its position in the flat choices list."""

    model_config = ConfigDict(extra="ignore")

    text: str
    index: int = 0
    logprobs: OpenAICompletionLogprobs | None = None
    finish_reason: str | None = None


class OpenAICompletionUsage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    total_tokens: int | None = None


class OpenAICompletionModel(BaseModel):
    """Body of a successful POST /completions response."""

    model_config = ConfigDict(extra="ignore")

    id: str
    object: str = "text_completion"
    created: int
    model: str
    choices: list[OpenAICompletionChoice] = Field(default_factory=list)
    usage: OpenAICompletionUsage | None = None


class CreateCompletionRequest(BaseModel):
    """Body of POST /completions. Serialize with ``to_payload`` to drop unset fields."""

    model: str
    prompt: list[str]
    max_tokens: int | None = None
    temperature: float | None = None
    top_p: float | None = None
    n: int | None = None
    stop: list[str] | None = None
    presence_penalty: float | None = None
    frequency_penalty: float | None = None
    best_of: int | None = None
    logit_bias: dict[str, float] | None = None
    user: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
