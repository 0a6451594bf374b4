"""LLM service API routes."""
import asyncio

import httpx
import structlog
from fastapi import APIRouter, HTTPException, Request
from prometheus_client import Counter

from openai_llm.api.schemas import GenerateRequest, GenerateResponse
from openai_llm.client.models import OpenAICompletionUsage
from openai_llm.exceptions import OpenAIClientError, OpenAIResponseError

COMPLETION_REQUESTS = Counter(
    "openai_llm_generate_requests_total",
    "Generate calls by outcome.",
    ["outcome"],
)
COMPLETION_TOKENS = Counter(
    "openai_llm_tokens_total",
    "Tokens reported by the completions API.",
    ["kind"],
)

router = APIRouter(tags=["llm"])


def _record_usage(usage: OpenAICompletionUsage | None) -> None:
    if usage is None:
        return
    if usage.prompt_tokens:
        COMPLETION_TOKENS.labels(kind="prompt").inc(usage.prompt_tokens)
    if usage.completion_tokens:
        COMPLETION_TOKENS.labels(kind="completion").inc(usage.completion_tokens)


@router.post("/generate", response_model=GenerateResponse)
async def generate(body: GenerateRequest, request: Request) -> GenerateResponse:
    llm = request.app.state.llm
    timeout = request.app.state.settings.generate_timeout_seconds
    log = structlog.get_logger()
    try:
        result = await asyncio.wait_for(llm.generate(body.prompts, stop=body.stop), timeout=timeout)
    except asyncio.TimeoutError:
        COMPLETION_REQUESTS.labels(outcome="timeout").inc()
        log.warning("generate_timeout", timeout_seconds=timeout)
        raise HTTPException(status_code=504, detail="LLM did not answer in time")
    except OpenAIClientError as e:
        COMPLETION_REQUESTS.labels(outcome="api_error").inc()
        raise HTTPException(status_code=502, detail=e.message)
    except OpenAIResponseError as e:
        COMPLETION_REQUESTS.labels(outcome="bad_response").inc()
        log.warning("generate_bad_response", error=str(e))
        raise HTTPException(status_code=502, detail=str(e))
    except httpx.TransportError as e:
        COMPLETION_REQUESTS.labels(outcome="transport_error").inc()
        log.warning("generate_transport_error", error_type=type(e).__name__, error=str(e))
        raise HTTPException(status_code=503, detail="LLM backend unreachable")
    COMPLETION_REQUESTS.labels(outcome="ok").inc()
    llm_output = result.llm_output or {}
    _record_usage(llm_output.get("token_usage"))
    return GenerateResponse.model_validate(result.model_dump())
