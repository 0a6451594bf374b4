"""Common DTOs and schemas."""
from shared.schemas.health import HealthResponse
from shared.schemas.llm_result import Generation, LLMResult

__all__ = ["Generation", "HealthResponse", "LLMResult"]
