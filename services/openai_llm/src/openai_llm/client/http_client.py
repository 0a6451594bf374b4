"""HTTP client for the OpenAI completions API."""
from typing import Any, ClassVar

import httpx
import structlog

from shared.http_client import DEFAULT_TIMEOUT_SECONDS, create_http_client, response_json

from openai_llm.client.base import BaseOpenAIClient
from openai_llm.client.models import CreateCompletionRequest, OpenAICompletionModel
from openai_llm.exceptions import OpenAIClientError

DEFAULT_BASE_URL = "https://api.openai.com/v1"


def _error_from_response(err: httpx.HTTPStatusError) -> OpenAIClientError:
    """Build OpenAIClientError from an error response ({"error": {"message", "type", "code"}})."""
    resp = err.response
    body = response_json(resp)
    error: dict[str, Any] = {}
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        error = body["error"]
    message = error.get("message") or resp.reason_phrase or "request failed"
    return OpenAIClientError(
        message,
        status_code=resp.status_code,
        error_type=error.get("type"),
        code=error.get("code"),
    )


class OpenAIClient(BaseOpenAIClient):
    """Calls POST {base_url}/completions once per create_completion (no retries)."""

    _instances: ClassVar[dict[str, "OpenAIClient"]] = {}

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        organization: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        headers = {"Authorization": f"Bearer {api_key}"}
        if organization:
            headers["OpenAI-Organization"] = organization
        self._headers = headers
        self._owns_client = http_client is None
        self._client = http_client or create_http_client(
            self._base_url, headers=headers, timeout=timeout
        )

    @classmethod
    def instance_for(cls, api_key: str) -> "OpenAIClient":
        """Shared client for an API key, created on first use.

        The cached client keeps its connection pool for the life of the process.
        httpx pools are bound to the event loop that opened them, so use it from
        a single loop; code that calls asyncio.run repeatedly should build its own
        OpenAIClient per loop instead.
        """
        client = cls._instances.get(api_key)
        if client is None:
            client = cls(api_key)
            cls._instances[api_key] = client
        return client

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
        request = CreateCompletionRequest(
            model=model,
            prompt=prompts,
            max_tokens=max_tokens,
            temperature=temperature,
            top_p=top_p,
            n=n,
            stop=stop,
            presence_penalty=presence_penalty,
            frequency_penalty=frequency_penalty,
            best_of=best_of,
            logit_bias=logit_bias,
        )
        log = structlog.get_logger()
        log.debug("openai_completion_request", model=model, prompt_count=len(prompts), n=n)
        # Headers are also passed per request so an injected AsyncClient gets them too
        resp = await self._client.post(
            f"{self._base_url}/completions",
            json=request.to_payload(),
            headers=self._headers,
        )
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            error = _error_from_response(e)
            log.warning(
                "openai_completion_error",
                status=error.status_code,
                error_type=error.error_type,
                message=error.message,
            )
            raise error from e
        completion = OpenAICompletionModel.model_validate(resp.json())
        log.debug(
            "openai_completion_response",
            completion_id=completion.id,
            choice_count=len(completion.choices),
        )
        return completion

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "OpenAIClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
