"""OpenAI legacy completion models exposed as BaseLLM."""
from typing import Any

from shared.llm import BaseLLM
from shared.schemas.llm_result import Generation, LLMResult

from openai_llm.client.base import BaseOpenAIClient
from openai_llm.client.http_client import OpenAIClient
from openai_llm.client.models import OpenAICompletionChoice, OpenAICompletionUsage
from openai_llm.config import OpenAISettings
from openai_llm.exceptions import OpenAIResponseError


class BaseOpenAI(BaseLLM):
    """Wrapper around OpenAI large language models.

    Sampling parameters are sent to the API exactly as configured. See
    https://platform.openai.com/docs/api-reference/completions/create for
    their meaning:

    - model: ID of the model to use.
    - max_tokens: maximum number of tokens to generate per completion.
    - temperature: sampling temperature, between 0 and 2.
    - top_p: nucleus sampling probability mass.
    - n: how many completions to generate for each prompt.
    - presence_penalty / frequency_penalty: between -2.0 and 2.0.
    - best_of: completions generated server-side, the best ``n`` returned.
    - logit_bias: token id -> bias, changes the likelihood of those tokens.
    """

    def __init__(
        self,
        *,
        api_key: str | None,
        api_client: BaseOpenAIClient | None,
        model: str,
        max_tokens: int,
        temperature: float,
        top_p: float,
        n: int,
        presence_penalty: float,
        frequency_penalty: float,
        best_of: int,
        logit_bias: dict[str, float] | None,
    ) -> None:
        if api_key is None and api_client is None:
            raise ValueError("Either api_key or api_client must be provided.")
        self._client = api_client or OpenAIClient.instance_for(api_key)
        self._owns_client = False
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.top_p = top_p
        self.n = n
        self.presence_penalty = presence_penalty
        self.frequency_penalty = frequency_penalty
        self.best_of = best_of
        self.logit_bias = logit_bias

    async def aclose(self) -> None:
        """Close a client built by from_settings. Injected and shared clients are left open."""
        if self._owns_client:
            await self._client.aclose()

    @property
    def llm_type(self) -> str:
        return "openai"

    @property
    def identifying_params(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "top_p": self.top_p,
            "n": self.n,
            "best_of": self.best_of,
        }

    async def _generate(
        self, prompts: list[str], stop: list[str] | None = None
    ) -> LLMResult:
        completion = await self._client.create_completion(
            model=self.model,
            prompts=prompts,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            top_p=self.top_p,
            n=self.n,
            stop=stop,
            presence_penalty=self.presence_penalty,
            frequency_penalty=self.frequency_penalty,
            best_of=self.best_of,
            logit_bias=self.logit_bias,
        )
        return self._create_llm_result(completion.choices, prompts, completion.usage)

    def _create_llm_result(
        self,
        choices: list[OpenAICompletionChoice],
        prompts: list[str],
        usage: OpenAICompletionUsage | None,
    ) -> LLMResult:
        """Split the flat choices list into consecutive groups of ``n``, one per prompt."""
        expected = len(prompts) * self.n
        if len(choices) < expected:
            raise OpenAIResponseError(
                f"Expected {expected} choices for {len(prompts)} prompt(s) with n={self.n}, "
                f"got {len(choices)}"
            )
        generations: list[list[Generation]] = []
        for i in range(len(prompts)):
            sub_choices = choices[i * self.n : (i + 1) * self.n]
            generations.append(
                [
                    Generation(
                        text=choice.text,
                        generation_info={
                            "finish_reason": choice.finish_reason,
                            "logprobs": choice.logprobs,
                        },
                    )
                    for choice in sub_choices
                ]
            )
        llm_output = {"token_usage": usage, "model": self.model}
        return LLMResult(generations=generations, llm_output=llm_output)


class OpenAI(BaseOpenAI):
    """Wrapper around OpenAI large language models, with the API's defaults."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        api_client: BaseOpenAIClient | None = None,
        model: str = "text-davinci-003",
        max_tokens: int = 256,
        temperature: float = 1,
        top_p: float = 1,
        n: int = 1,
        presence_penalty: float = 0,
        frequency_penalty: float = 0,
        best_of: int = 1,
        logit_bias: dict[str, float] | None = None,
    ) -> None:
        super().__init__(
            api_key=api_key,
            api_client=api_client,
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            top_p=top_p,
            n=n,
            presence_penalty=presence_penalty,
            frequency_penalty=frequency_penalty,
            best_of=best_of,
            logit_bias=logit_bias,
        )

    @classmethod
    def from_settings(
        cls,
        settings: OpenAISettings,
        api_client: BaseOpenAIClient | None = None,
    ) -> "OpenAI":
        """Build from OPENAI_* settings. An explicit client wins over the configured key.

        When the client is built here from the key, the caller owns it and must
        ``await llm.aclose()`` when done.
        """
        owns_client = False
        if api_client is None and settings.api_key is not None:
            owns_client = True
            api_client = OpenAIClient(
                settings.api_key.get_secret_value(),
                base_url=settings.base_url,
                organization=settings.organization,
                timeout=settings.request_timeout_seconds,
            )
        llm = cls(
            api_client=api_client,
            model=settings.model,
            max_tokens=settings.max_tokens,
            temperature=settings.temperature,
            top_p=settings.top_p,
            n=settings.n,
            presence_penalty=settings.presence_penalty,
            frequency_penalty=settings.frequency_penalty,
            best_of=settings.best_of,
            logit_bias=settings.logit_bias,
        )
        llm._owns_client = owns_client
        return llm
