from openai_llm.client.base import BaseOpenAIClient
from openai_llm.client.http_client import OpenAIClient
from openai_llm.client.mock_client import MockOpenAIClient
from openai_llm.client.models import (
    CreateCompletionRequest,
    OpenAICompletionChoice,
    OpenAICompletionLogprobs,
    OpenAICompletionModel,
    OpenAICompletionUsage,
)

__all__ = [
    "BaseOpenAIClient",
    "CreateCompletionRequest",
    "MockOpenAIClient",
    "OpenAIClient",
    "OpenAICompletionChoice",
    "OpenAICompletionLogprobs",
    "OpenAICompletionModel",
    "OpenAICompletionUsage",
]
