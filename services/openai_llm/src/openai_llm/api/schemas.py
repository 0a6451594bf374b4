from pydantic import BaseModel, Field

from shared.schemas import LLMResult


class GenerateRequest(BaseModel):
    prompts: list[str] = Field(..., min_length=1)
    stop: list[str] | None = Field(default=None, description="Sequences where generation stops.")


class GenerateResponse(LLMResult):
    """LLMResult as returned over HTTP (token usage serialized as a plain object)."""
