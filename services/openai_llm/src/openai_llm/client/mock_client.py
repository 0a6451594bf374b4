"""Mock OpenAI client: deterministic completions without network access."""
import time
import uuid

from openai_llm.client.base import BaseOpenAIClient
from openai_llm.client.models import (
    OpenAICompletionChoice,
    OpenAICompletionModel,
    OpenAICompletionUsage,
)


def _count_tokens(text: str) -> int:
    """Whitespace word count, a rough stand-in for the real tokenizer."""
    return len(text.split())


def _mock_text(
    prompt: str, candidate: int, max_tokens: int | None, stop: list[str] | None
) -> tuple[str, str]:
    """Return (text, finish_reason) for one candidate."""
    words = f"mock completion {candidate + 1} for: {prompt}".split()
    finish_reason = "stop"
    if max_tokens is not None and len(words) > max_tokens:
        words = words[:max_tokens]
        finish_reason = "length"
    text = " ".join(words)
    for s in stop or []:
        pos = text.find(s)
        if pos != -1:
            text = text[:pos]
            finish_reason = "stop"
    return text, finish_reason


class MockOpenAIClient(BaseOpenAIClient):
    """Returns ``n`` choices per prompt, grouped by prompt in request order."""

    def __init__(self) -> None:
        # Only the latest request is kept
        self.last_request: dict | None = None

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
        self.last_request = {"model": model, "prompts": list(prompts), "n": n, "stop": stop}
        per_prompt = n or 1
        choices: list[OpenAICompletionChoice] = []
        for prompt in prompts:
            for candidate in range(per_prompt):
                text, finish_reason = _mock_text(prompt, candidate, max_tokens, stop)
                choices.append(
                    OpenAICompletionChoice(
                        text=text,
                        index=len(choices),
                        finish_reason=finish_reason,
                    )
                )
        prompt_tokens = sum(_count_tokens(p) for p in prompts)
        completion_tokens = sum(_count_tokens(c.text) for c in choices)
        return OpenAICompletionModel(
            id=f"cmpl-mock-{uuid.uuid4().hex[:12]}",
            created=int(time.time()),
            model=model,
            choices=choices,
            usage=OpenAICompletionUsage(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=prompt_tokens + completion_tokens,
            ),
        )
