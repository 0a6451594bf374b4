"""OpenAI LLM service entrypoint - HTTP gateway to the completions API or mock."""
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from prometheus_client import make_asgi_app

from shared.logging import configure_logging
from shared.middleware import RequestIdMiddleware
from shared.schemas import HealthResponse

from openai_llm.api.routes import router
from openai_llm.client import MockOpenAIClient, OpenAIClient
from openai_llm.config import OpenAISettings
from openai_llm.llms.openai import OpenAI

_settings: OpenAISettings | None = None


def get_settings() -> OpenAISettings:
    global _settings
    if _settings is None:
        _settings = OpenAISettings()
    return _settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    client = None
    if settings.mock:
        llm = OpenAI.from_settings(settings, api_client=MockOpenAIClient())
    else:
        client = OpenAIClient(
            settings.api_key.get_secret_value(),
            base_url=settings.base_url,
            organization=settings.organization,
            timeout=settings.request_timeout_seconds,
        )
        llm = OpenAI.from_settings(settings, api_client=client)
    app.state.llm = llm
    structlog.get_logger().info("llm_service_ready", mock=settings.mock, model=settings.model)
    yield
    if client is not None:
        await client.aclose()


def create_app(settings: OpenAISettings | None = None) -> FastAPI:
    settings = settings or get_settings()
    if not settings.mock and settings.api_key is None:
        raise RuntimeError("OPENAI_API_KEY is required when OPENAI_MOCK is false")
    configure_logging(json_logs=settings.json_logs)
    app = FastAPI(title="OpenAI LLM Service", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.add_middleware(RequestIdMiddleware)

    app.include_router(router)

    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    @app.get("/healthz", response_model=HealthResponse)
    async def healthz() -> HealthResponse:
        return HealthResponse(status="ok", service="openai_llm")

    @app.get("/readyz", response_model=HealthResponse)
    async def readyz() -> HealthResponse:
        return HealthResponse(status="ok", service="openai_llm", mock=settings.mock)

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        reload=False,
    )
