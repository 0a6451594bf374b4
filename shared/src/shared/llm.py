"""Base class for text-in/text-out language models."""
from abc import ABC, abstractmethod
from typing import Any

import structlog

from shared.schemas.llm_result import LLMResult


class BaseLLM(ABC):
    """Language model that completes raw text prompts.

    Providers implement ``_generate``; callers use ``generate`` for batches and
    ``call``/``predict`` for a single prompt.
    """

    @property
    @abstractmethod
    def llm_type(self) -> str:
        """Short provider tag, e.g. "openai"."""
        ...

    @property
    def identifying_params(self) -> dict[str, Any]:
        return {}

    @abstractmethod
    async def _generate(
        self, prompts: list[str], stop: list[str] | None = None
    ) -> LLMResult:
        ...

    async def generate(
        self, prompts: list[str], stop: list[str] | None = None
    ) -> LLMResult:
        """Run the model on a batch of prompts. One inner list of candidates per prompt."""
        if not prompts:
            raise ValueError("prompts must not be empty")
        log = structlog.get_logger()
        log.info(
            "llm_generate_start",
            llm_type=self.llm_type,
            prompt_count=len(prompts),
            has_stop=stop is not None,
            **self.identifying_params,
        )
        result = await self._generate(prompts, stop=stop)
        log.info(
            "llm_generate_done",
            llm_type=self.llm_type,
            generation_count=sum(len(g) for g in result.generations),
        )
        return result

    async def call(self, prompt: str, stop: list[str] | None = None) -> str:
        """Complete a single prompt and return the first candidate's text."""
        result = await self.generate([prompt], stop=stop)
        return result.first_text()

    async def predict(self, text: str, stop: list[str] | None = None) -> str:
        return await self.call(text, stop=stop)
